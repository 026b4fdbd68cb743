"""
Lets you say

    py -m picolang program.pico

or just `py -m picolang` for an interactive session.
"""
from picolang.cmdline import main

main()
