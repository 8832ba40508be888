"""
Identifiers come in three flavors.

Before resolution, the parser produces a Name, which is just the text.
A Name can be boiled down to a Hash, which is what scopes actually key on,
so a Name and its Hash find the same declaration.
After resolution, every variable reference is a Slot: an index unique across the whole program.
"""
from hashlib import blake2b

def _digest(text:str) -> int:
	return int.from_bytes(blake2b(text.encode("utf-8"), digest_size=8).digest(), "big")

class Identifier:
	_key: tuple
	
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __hash__(self): return hash((type(self), self._key))
	
	def key(self):
		""" What a scope should use to look this identifier up. """
		raise NotImplementedError(type(self))
	
	def is_resolved(self) -> bool: return False

class Name(Identifier):
	""" The span, if known, is where the name appeared in the source. It does not affect equality. """
	def __init__(self, text:str, span:slice=None):
		assert isinstance(text, str), text
		self.text, self.span = text, span
		self._key = (text,)
	def __repr__(self): return "<Name %s>" % self.text
	def __str__(self): return self.text
	def to_hash(self) -> "Hash": return Hash(_digest(self.text))
	def key(self): return _digest(self.text)

class Hash(Identifier):
	def __init__(self, digest:int):
		self.digest = digest
		self._key = (digest,)
	def __repr__(self): return "<Hash %x>" % self.digest
	def __str__(self): return "#%x" % self.digest
	def key(self): return self.digest

class Slot(Identifier):
	""" The text is a courtesy for messages. Only the index matters for equality. """
	def __init__(self, index:int, text:str=None):
		assert isinstance(index, int), index
		self.index, self.text = index, text
		self._key = (index,)
	def __repr__(self): return "<Slot %d>" % self.index
	def __str__(self): return self.text if self.text is not None else "$%d" % self.index
	def key(self): return self.index
	def is_resolved(self) -> bool: return True
