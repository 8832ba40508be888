"""
Functions every program can call without declaring them.
The resolver reserves their global slots first; the interpreter then fills those slots in.
"""
import time
from .runtime import Primitive

def _clock() -> float:
	""" Wall-clock time in milliseconds. """
	return time.time() * 1000.0

NATIVES = {
	"clock": Primitive("clock", _clock, 0),
}

def install(resolver, env):
	for name, value in NATIVES.items():
		env.define(resolver.global_slot(name).key(), value)
