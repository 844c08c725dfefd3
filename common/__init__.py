"""
Shared infrastructure: logging setup, the processor contract and its error
taxonomy, the stage orchestrator and generic label cleaning.
"""
