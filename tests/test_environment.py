import unittest

from loxley.environment import Environment, ABSENT
from loxley.arena import ScopeArena, ArenaFrame, StaleScope, ROOT

class SharedContract:
	""" Both representations must answer the same way. Subclasses say how to make a root. """
	
	def make_root(self): raise NotImplementedError
	
	def test_define_reports_previous(self):
		env = self.make_root()
		self.assertIs(ABSENT, env.define(1, "first"))
		self.assertEqual("first", env.define(1, "second"))
		self.assertEqual("second", env.get(1))
	
	def test_nil_is_a_value_not_an_absence(self):
		env = self.make_root()
		env.define(1, None)
		self.assertIsNone(env.get(1))
		self.assertIs(ABSENT, env.get(2))
	
	def test_define_never_reaches_outward(self):
		outer = self.make_root()
		outer.define(1, "outer")
		inner = outer.child()
		self.assertIs(ABSENT, inner.define(1, "inner"))
		self.assertEqual("inner", inner.get(1))
		self.assertEqual("outer", outer.get(1))
	
	def test_get_searches_outward(self):
		outer = self.make_root()
		outer.define(1, "outer")
		self.assertEqual("outer", outer.child().child().get(1))
	
	def test_assign_overwrites_where_found(self):
		outer = self.make_root()
		outer.define(1, "old")
		inner = outer.child()
		self.assertEqual("old", inner.assign(1, "new"))
		self.assertEqual("new", outer.get(1))
		self.assertFalse(inner.holds(1))
	
	def test_assign_to_nothing_changes_nothing(self):
		outer = self.make_root()
		inner = outer.child()
		self.assertIs(ABSENT, inner.assign(7, "value"))
		self.assertIs(ABSENT, inner.get(7))
		self.assertIs(ABSENT, outer.get(7))
	
	def test_siblings_share_a_parent(self):
		root = self.make_root()
		root.define(1, 0.0)
		left, right = root.child(), root.child()
		left.assign(1, 5.0)
		self.assertEqual(5.0, right.get(1))

class ChainedTests(SharedContract, unittest.TestCase):
	def make_root(self): return Environment()

class ArenaFrameTests(SharedContract, unittest.TestCase):
	def make_root(self): return ArenaFrame(ScopeArena())

class Captor:
	""" Stands in for a closure. """
	def __init__(self, *held): self.held = held
	def captures(self): return self.held

class ArenaTests(unittest.TestCase):
	
	def test_reclamation(self):
		arena = ScopeArena()
		children = [arena.add_scope(ROOT) for _ in range(49)]
		self.assertEqual(list(range(1, 50)), children)
		self.assertEqual(50, len(arena))
		for scope in range(10, 50):
			arena.drop(scope)
		self.assertTrue(arena.compact())
		self.assertEqual(20, len(arena))
		self.assertFalse(arena.compact(), "nothing left to shrink")
		self.assertEqual(20, len(arena))
	
	def test_drop_unlinks_from_parent(self):
		arena = ScopeArena()
		a, b, c = (arena.add_scope(ROOT) for _ in range(3))
		arena.drop(b)
		self.assertEqual([a, c], arena.children(ROOT))
		self.assertEqual([ROOT, a, c], arena.active_scopes())
	
	def test_use_after_drop_is_refused(self):
		arena = ScopeArena()
		scope = arena.add_scope(ROOT)
		arena.define(scope, 1, "x")
		arena.drop(scope)
		for attempt in (lambda: arena.get(scope, 1), lambda: arena.define(scope, 1, "y"), lambda: arena.drop(scope)):
			with self.assertRaises(StaleScope):
				attempt()
	
	def test_ids_past_the_table_are_stale(self):
		arena = ScopeArena()
		scopes = [arena.add_scope(ROOT) for _ in range(9)]
		for scope in scopes[1:]: arena.drop(scope)
		arena.compact()
		self.assertEqual(4, len(arena))
		with self.assertRaises(StaleScope):
			arena.get(scopes[-1], 1)
	
	def test_root_stays(self):
		with self.assertRaises(ValueError):
			ScopeArena().drop(ROOT)
	
	def test_release_spares_retained_scopes(self):
		arena = ScopeArena()
		outer = arena.add_scope(ROOT)
		inner = arena.add_scope(outer)
		arena.retain(inner)
		arena.release(inner)
		arena.release(outer)
		self.assertTrue(arena.is_active(inner))
		self.assertTrue(arena.is_active(outer))
		other = arena.add_scope(ROOT)
		arena.release(other)
		self.assertFalse(arena.is_active(other))
	
	def test_collection_drops_what_nothing_reaches(self):
		arena = ScopeArena()
		kept, lost = arena.add_scope(ROOT), arena.add_scope(ROOT)
		inner = arena.add_scope(lost)
		for scope in (kept, inner): arena.retain(scope)
		for scope in (inner, lost, kept): arena.release(scope)
		arena.define(ROOT, 1, Captor(ArenaFrame(arena, kept)))
		self.assertEqual(2, arena.collect())
		self.assertEqual([ROOT, kept], arena.active_scopes())
	
	def test_collection_follows_values_and_roots(self):
		arena = ScopeArena()
		via_root, via_value = arena.add_scope(ROOT), arena.add_scope(ROOT)
		for scope in (via_root, via_value):
			arena.retain(scope)
			arena.release(scope)
		arena.define(via_root, 1, Captor(ArenaFrame(arena, via_value)))
		self.assertEqual(0, arena.collect([Captor(ArenaFrame(arena, via_root))]))
		self.assertEqual(2, arena.collect())
		self.assertEqual([ROOT], arena.active_scopes())
	
	def test_collection_spares_scopes_still_in_use(self):
		arena = ScopeArena()
		busy = arena.add_scope(ROOT)
		arena.retain(busy)
		self.assertEqual(0, arena.collect())
		self.assertTrue(arena.is_active(busy))
	
	def test_frames_walk_parents(self):
		root = ArenaFrame(ScopeArena())
		child = root.child()
		self.assertEqual(root.scope, root.arena.parent(child.scope))

if __name__ == '__main__':
	unittest.main()
