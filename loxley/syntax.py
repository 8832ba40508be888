"""
The abstract syntax tree.

Every node is an immutable value object: two nodes are equal when they are
the same type with equal fields. The grammar builds them bottom-up; the resolver
builds new ones with slots in place of names; the interpreter only reads them.
"""
from enum import Enum
from typing import Optional, Sequence, Any
from .ontology import Identifier

class Node:
	_key: tuple
	
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __hash__(self): return hash((type(self), self._key))
	def __repr__(self):
		from .render import render
		return render(self)

class Expr(Node): pass
class Stmt(Node): pass

# Operators, by family. The values are the glyphs the printer shows.

class LogicalOp(Enum):
	OR = "or"
	AND = "and"

class EqualityOp(Enum):
	EQUAL = "=="
	NOT_EQUAL = "!="

class ComparisonOp(Enum):
	LESS = "<"
	LESS_EQUAL = "<="
	GREATER = ">"
	GREATER_EQUAL = ">="

class AdditionOp(Enum):
	ADD = "+"
	SUBTRACT = "-"

class MultiplicationOp(Enum):
	MULTIPLY = "*"
	DIVIDE = "/"

class UnaryOp(Enum):
	BANG = "!"
	MINUS = "-"

# Expressions

class Assignment(Expr):
	def __init__(self, target:Identifier, value:Expr):
		self.target, self.value = target, value
		self._key = (target, value)

class BinaryExpr(Expr):
	""" Common shape for the operator families. Each subclass admits only its own operators. """
	OPS: type
	def __init__(self, op, lhs:Expr, rhs:Expr):
		assert isinstance(op, self.OPS), (type(self), op)
		self.op, self.lhs, self.rhs = op, lhs, rhs
		self._key = (op, lhs, rhs)

class Logical(BinaryExpr): OPS = LogicalOp
class Equality(BinaryExpr): OPS = EqualityOp
class Comparison(BinaryExpr): OPS = ComparisonOp
class Addition(BinaryExpr): OPS = AdditionOp
class Multiplication(BinaryExpr): OPS = MultiplicationOp

class Unary(Expr):
	def __init__(self, op:UnaryOp, operand:Expr):
		self.op, self.operand = op, operand
		self._key = (op, operand)

class Call(Expr):
	def __init__(self, callee:Expr, arguments:Sequence[Expr]):
		self.callee, self.arguments = callee, tuple(arguments)
		self._key = (callee, self.arguments)

class Primary(Expr):
	""" A literal. The payload type is part of the key, because True == 1.0 in Python. """
	def __init__(self, value:Any):
		assert value is None or isinstance(value, (bool, str, float)), value
		self.value = value
		self._key = (type(value), value)

class Grouping(Expr):
	def __init__(self, inner:Expr):
		self.inner = inner
		self._key = (inner,)

class Lambda(Expr):
	def __init__(self, params:Sequence[Identifier], body:"Block"):
		self.params, self.body = tuple(params), body
		self._key = (self.params, body)

class Variable(Expr):
	def __init__(self, name:Identifier):
		self.name = name
		self._key = (name,)

class Get(Expr):
	def __init__(self, obj:Expr, field:str):
		self.obj, self.field = obj, field
		self._key = (obj, field)

class Set(Expr):
	def __init__(self, obj:Expr, field:str, value:Expr):
		self.obj, self.field, self.value = obj, field, value
		self._key = (obj, field, value)

# Statements

class Expression(Stmt):
	def __init__(self, expr:Expr):
		self.expr = expr
		self._key = (expr,)

class If(Stmt):
	def __init__(self, cond:Expr, then:Stmt, otherwise:Optional[Stmt]=None):
		self.cond, self.then, self.otherwise = cond, then, otherwise
		self._key = (cond, then, otherwise)

class While(Stmt):
	def __init__(self, cond:Expr, body:Stmt):
		self.cond, self.body = cond, body
		self._key = (cond, body)

class Print(Stmt):
	def __init__(self, expr:Expr):
		self.expr = expr
		self._key = (expr,)

class Declaration(Stmt):
	def __init__(self, name:Identifier, initializer:Expr):
		self.name, self.initializer = name, initializer
		self._key = (name, initializer)

class Function(Stmt):
	def __init__(self, name:Identifier, params:Sequence[Identifier], body:"Block"):
		self.name, self.params, self.body = name, tuple(params), body
		self._key = (name, self.params, body)

class Return(Stmt):
	def __init__(self, value:Expr):
		self.value = value
		self._key = (value,)

class Class(Stmt):
	def __init__(self, name:Identifier, methods:Sequence[Function]):
		self.name, self.methods = name, tuple(methods)
		self._key = (name, self.methods)

class Block(Stmt):
	def __init__(self, statements:Sequence[Stmt]):
		self.statements = tuple(statements)
		self._key = (self.statements,)
