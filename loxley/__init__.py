""" Loxley: a small Lox interpreter built from parser combinators and a slot-resolving tree-walker. """
