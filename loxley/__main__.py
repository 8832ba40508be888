"""
Lets `python -m loxley program.lox` do the same as the console script.
"""
from loxley.cmdline import main

main()
