"""
Run-time scopes kept all together in one table, addressed by integer ScopeId.

Each entry knows its parent, its children (in order of creation), and its own bindings.
A separate ordered set tracks which ids are live. Dropping a scope retires its id;
compaction then trims the tail of the table once enough of it has gone dead.

A scope that some closure captured outlives its release. It waits, marked as exited,
until a collection finds that no live scope or value still reaches it.

Safety contract: Any access through an id that is not active raises StaleScope.
That includes ids beyond the end of the table after compaction.
New scopes always take the next id past the end of the table, so compaction
may hand a trimmed id out again. Do not hold dropped ids across a compaction.
"""
from typing import Optional
from .environment import ABSENT

ScopeId = int

ROOT: ScopeId = 0

class StaleScope(KeyError):
	""" Someone used a ScopeId after it was dropped. """
	def __init__(self, scope_id:ScopeId):
		super().__init__(scope_id)
		self.scope_id = scope_id
	def __str__(self): return "scope %d is no longer active" % self.scope_id

class _Entry:
	__slots__ = ("parent", "children", "bindings")
	def __init__(self, parent:Optional[ScopeId]):
		self.parent = parent
		self.children = {}   # Used as an ordered set.
		self.bindings = {}

class ScopeArena:
	
	def __init__(self):
		self._table = [_Entry(None)]
		self._active = {ROOT: None}   # Also an ordered set.
		self._retained = set()
		self._exited = set()
	
	def __len__(self): return len(self._table)
	
	def _entry(self, scope:ScopeId) -> _Entry:
		if scope not in self._active: raise StaleScope(scope)
		return self._table[scope]
	
	def is_active(self, scope:ScopeId) -> bool: return scope in self._active
	def active_scopes(self) -> list: return list(self._active)
	def parent(self, scope:ScopeId) -> Optional[ScopeId]: return self._entry(scope).parent
	def children(self, scope:ScopeId) -> list: return list(self._entry(scope).children)
	
	def add_scope(self, parent:ScopeId) -> ScopeId:
		siblings = self._entry(parent).children
		scope = len(self._table)
		self._table.append(_Entry(parent))
		siblings[scope] = None
		self._active[scope] = None
		return scope
	
	def drop(self, scope:ScopeId):
		if scope == ROOT: raise ValueError("The root scope cannot be dropped.")
		entry = self._entry(scope)
		del self._active[scope]
		self._retained.discard(scope)
		self._exited.discard(scope)
		entry.bindings.clear()
		if entry.parent in self._active:
			self._table[entry.parent].children.pop(scope, None)
	
	def compact(self) -> bool:
		"""
		Shrink the table to twice the length needed to hold the highest active id.
		Answer False if there was nothing to shrink.
		"""
		target = 2 * (max(self._active) + 1)
		if len(self._table) <= target: return False
		del self._table[target:]
		return True
	
	def retain(self, scope:ScopeId):
		""" Protect this scope and its ancestors from being dropped on release. """
		while scope is not None and scope not in self._retained:
			self._retained.add(scope)
			scope = self._entry(scope).parent
	
	def release(self, scope:ScopeId):
		""" Drop the scope unless something captured it, in which case leave it for collection. """
		if scope == ROOT: return
		if scope in self._retained: self._exited.add(scope)
		else: self.drop(scope)
	
	def collect(self, roots=()) -> int:
		"""
		Drop every exited scope that nothing live can reach. Answer how many went.
		
		Scopes not yet released are live, and so is anything in `roots`. Values reach
		further scopes and values through their `captures()` method, if they have one.
		Only call this between runs: a value in flight on the Python stack is invisible here.
		"""
		marked = set()
		pending = [scope for scope in self._active if scope not in self._exited]
		values, seen = list(roots), set()
		while pending or values:
			if pending:
				scope = pending.pop()
				while scope in self._active and scope not in marked:
					marked.add(scope)
					entry = self._table[scope]
					values.extend(entry.bindings.values())
					scope = entry.parent
				continue
			value = values.pop()
			if id(value) in seen or not hasattr(value, "captures"): continue
			seen.add(id(value))
			for item in value.captures():
				if isinstance(item, ArenaFrame) and item.arena is self: pending.append(item.scope)
				else: values.append(item)
		doomed = sorted(self._exited - marked, reverse=True)
		for scope in doomed: self.drop(scope)
		return len(doomed)
	
	def define(self, scope:ScopeId, key, value):
		bindings = self._entry(scope).bindings
		previous = bindings.get(key, ABSENT)
		bindings[key] = value
		return previous
	
	def _find(self, scope:ScopeId, key) -> Optional[dict]:
		while scope is not None:
			entry = self._entry(scope)
			if key in entry.bindings: return entry.bindings
			scope = entry.parent
	
	def get(self, scope:ScopeId, key):
		bindings = self._find(scope, key)
		if bindings is None: return ABSENT
		return bindings[key]
	
	def assign(self, scope:ScopeId, key, value):
		bindings = self._find(scope, key)
		if bindings is None: return ABSENT
		previous = bindings[key]
		bindings[key] = value
		return previous

class ArenaFrame:
	"""
	Gives one scope of an arena the same face as an Environment,
	so the interpreter need not care which representation it runs on.
	"""
	def __init__(self, arena:ScopeArena, scope:ScopeId=ROOT):
		self.arena, self.scope = arena, scope
	
	def __repr__(self): return "<ArenaFrame %d>" % self.scope
	
	def child(self) -> "ArenaFrame": return ArenaFrame(self.arena, self.arena.add_scope(self.scope))
	def define(self, key, value): return self.arena.define(self.scope, key, value)
	def get(self, key): return self.arena.get(self.scope, key)
	def assign(self, key, value): return self.arena.assign(self.scope, key, value)
	def holds(self, key) -> bool: return key in self.arena._entry(self.scope).bindings
	def retain(self): self.arena.retain(self.scope)
	def release(self): self.arena.release(self.scope)
