# -*- coding: utf-8 -*-
from agencies.guelph_transit_bus.cli import main

main()
