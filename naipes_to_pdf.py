#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Convert a text file of paired lines into a printable sheet of cards.
"""

# local repo modules
import card_sheet_builder.cli


if __name__ == "__main__":
	card_sheet_builder.cli.main()
