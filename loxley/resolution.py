"""
Static scope resolution.

One top-down walk over the tree, keeping an explicit stack of scopes.
Each declaration gets the next slot from a counter that only ever goes up,
so slots are unique across the whole program, not just within a scope.
Every variable reference becomes the slot of the innermost declaration of that name.
The walk builds a new tree; the parser's tree is left as it was.

A Resolver may be fed one program after another (as the REPL does).
It keeps its global scope and its counter from one to the next.
"""
from contextlib import contextmanager
from enum import Enum
from typing import Iterable, Sequence

from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Identifier, Name, Slot

class Failure(Enum):
	UNDEFINED = "Undefined"
	TYPE_MISMATCH = "TypeMismatch"

class ResolutionError(Exception):
	"""
	UNDEFINED means a user's program names something it never declared.
	TYPE_MISMATCH means the resolver was handed something it has no business resolving.
	"""
	def __init__(self, tag:Failure, subject):
		super().__init__(tag, subject)
		self.tag, self.subject = tag, subject
	def __str__(self):
		if self.tag is Failure.UNDEFINED: return "Undefined: %s" % self.subject
		return "TypeMismatch: %r" % (self.subject,)

class Resolver(Visitor):
	_scopes: list[dict]
	_next_slot: int
	
	def __init__(self, predeclared:Iterable[str]=()):
		self._scopes = [{}]
		self._next_slot = 0
		for text in predeclared:
			self._declare(Name(text))
	
	def global_slot(self, text:str) -> Slot:
		""" Where a global name lives. Raises ResolutionError if it does not. """
		key = Name(text).key()
		if key not in self._scopes[0]: self._undefined(text)
		return self._scopes[0][key]
	
	def depth(self) -> int: return len(self._scopes)
	
	def resolve(self, stmts:Sequence[syntax.Stmt]) -> list[syntax.Stmt]:
		"""
		All or nothing. If anything fails, the global scope goes back to how it was,
		so a REPL can carry on as if the failed input had never been typed.
		"""
		for s in stmts:
			if not isinstance(s, syntax.Stmt): raise ResolutionError(Failure.TYPE_MISMATCH, s)
		saved = dict(self._scopes[0])
		try: return [self.visit(s) for s in stmts]
		except ResolutionError:
			self._scopes[0] = saved
			raise
	
	def resolve_expression(self, expr:syntax.Expr) -> syntax.Expr:
		if not isinstance(expr, syntax.Expr): raise ResolutionError(Failure.TYPE_MISMATCH, expr)
		return self.visit(expr)
	
	# Scope machinery
	
	@contextmanager
	def _scope(self):
		self._scopes.append({})
		try: yield
		finally: self._scopes.pop()
	
	@staticmethod
	def _undefined(name):
		raise ResolutionError(Failure.UNDEFINED, name)
	
	def _key(self, name:Identifier):
		if name.is_resolved(): raise ResolutionError(Failure.TYPE_MISMATCH, name)
		return name.key()
	
	def _declare(self, name:Identifier) -> Slot:
		""" Re-declaring within the same scope keeps the same slot. """
		scope = self._scopes[-1]
		key = self._key(name)
		if key not in scope:
			scope[key] = Slot(self._next_slot, str(name))
			self._next_slot += 1
		return scope[key]
	
	def _lookup(self, name:Identifier) -> Slot:
		key = self._key(name)
		for scope in reversed(self._scopes):
			if key in scope: return scope[key]
		self._undefined(name)
	
	def _each(self, nodes):
		return [self.visit(n) for n in nodes]
	
	# Statements
	
	def visit_Expression(self, it:syntax.Expression): return syntax.Expression(self.visit(it.expr))
	def visit_Print(self, it:syntax.Print): return syntax.Print(self.visit(it.expr))
	def visit_Return(self, it:syntax.Return): return syntax.Return(self.visit(it.value))
	def visit_While(self, it:syntax.While): return syntax.While(self.visit(it.cond), self.visit(it.body))
	
	def visit_If(self, it:syntax.If):
		otherwise = None if it.otherwise is None else self.visit(it.otherwise)
		return syntax.If(self.visit(it.cond), self.visit(it.then), otherwise)
	
	def visit_Declaration(self, it:syntax.Declaration):
		# The initializer cannot see the name it initializes, unless that name is already in this scope.
		initializer = self.visit(it.initializer)
		return syntax.Declaration(self._declare(it.name), initializer)
	
	def visit_Block(self, it:syntax.Block):
		with self._scope():
			return syntax.Block(self._each(it.statements))
	
	def _function_parts(self, params, body:syntax.Block):
		with self._scope():
			slots = [self._declare(p) for p in params]
			return slots, syntax.Block(self._each(body.statements))
	
	def visit_Function(self, it:syntax.Function):
		name = self._declare(it.name)   # Before the parameters, so the body may recurse.
		params, body = self._function_parts(it.params, it.body)
		return syntax.Function(name, params, body)
	
	def visit_Class(self, it:syntax.Class):
		name = self._declare(it.name)
		with self._scope():
			methods = self._each(it.methods)
		return syntax.Class(name, methods)
	
	# Expressions
	
	def visit_Primary(self, it:syntax.Primary): return it
	def visit_Variable(self, it:syntax.Variable): return syntax.Variable(self._lookup(it.name))
	def visit_Grouping(self, it:syntax.Grouping): return syntax.Grouping(self.visit(it.inner))
	def visit_Unary(self, it:syntax.Unary): return syntax.Unary(it.op, self.visit(it.operand))
	
	def visit_Assignment(self, it:syntax.Assignment):
		value = self.visit(it.value)
		return syntax.Assignment(self._lookup(it.target), value)
	
	def visit_BinaryExpr(self, it:syntax.BinaryExpr):
		return type(it)(it.op, self.visit(it.lhs), self.visit(it.rhs))
	
	def visit_Call(self, it:syntax.Call):
		return syntax.Call(self.visit(it.callee), self._each(it.arguments))
	
	def visit_Lambda(self, it:syntax.Lambda):
		params, body = self._function_parts(it.params, it.body)
		return syntax.Lambda(params, body)
	
	def visit_Get(self, it:syntax.Get): return syntax.Get(self.visit(it.obj), it.field)
	
	def visit_Set(self, it:syntax.Set):
		return syntax.Set(self.visit(it.obj), it.field, self.visit(it.value))

def resolve(stmts:Sequence[syntax.Stmt], predeclared:Iterable[str]=()) -> list[syntax.Stmt]:
	""" One-shot convenience: a fresh resolver for one program. """
	return Resolver(predeclared).resolve(stmts)
