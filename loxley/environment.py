"""
Run-time scopes, linked by parent pointers.

Python already shares objects by reference, so a closure simply holds on to
the scope it was born in, and any number of closures may share one ancestor.
Keys are whatever the resolver settled on; after resolution, slot indices.

Because nil is None, "nothing bound here" is the ABSENT sentinel.
"""
from typing import Optional

ABSENT = object()

class Environment:
	_bindings: dict
	parent: Optional["Environment"]
	
	def __init__(self, parent:"Environment"=None):
		self._bindings = {}
		self.parent = parent
	
	def __repr__(self): return "<Environment %d bindings>" % len(self._bindings)
	
	def child(self) -> "Environment":
		return Environment(self)
	
	def define(self, key, value):
		""" Bind in this very scope. Answer what was bound here before, if anything. """
		previous = self._bindings.get(key, ABSENT)
		self._bindings[key] = value
		return previous
	
	def get(self, key):
		env = self
		while env is not None:
			if key in env._bindings: return env._bindings[key]
			env = env.parent
		return ABSENT
	
	def assign(self, key, value):
		""" Overwrite the nearest existing binding. If there is none, change nothing. """
		env = self
		while env is not None:
			if key in env._bindings:
				previous = env._bindings[key]
				env._bindings[key] = value
				return previous
			env = env.parent
		return ABSENT
	
	def holds(self, key) -> bool:
		return key in self._bindings
	
	# The garbage collector does the bookkeeping for this representation.
	def retain(self): pass
	def release(self): pass
