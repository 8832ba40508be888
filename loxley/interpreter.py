"""
The tree-walking evaluator.

It runs resolved trees only: every Variable carries a Slot, and the slot's index is the
environment key. The interpreter never changes the tree; all state lives in environments.
`return` travels as a ReturnSignal exception from the Return statement up to the call.
"""
import math, sys
from typing import Sequence, Callable as PyCallable

from . import syntax
from .syntax import LogicalOp, EqualityOp, ComparisonOp, AdditionOp, MultiplicationOp, UnaryOp
from .environment import Environment, ABSENT
from .runtime import (
	LoxRuntimeError, OperandTypeError, UnaryTypeError, UndefinedVariable, NotCallable, NotAnInstance, ArityMismatch,
	ReturnSignal, Callable, Function, LoxClass, Instance, display, is_truthy,
)

EPSILON = sys.float_info.epsilon

def _is_number(value) -> bool:
	return type(value) is float

def numbers_equal(a:float, b:float) -> bool:
	return a == b or abs(a - b) < EPSILON

def divide(a:float, b:float) -> float:
	""" IEEE semantics. Python would raise ZeroDivisionError. """
	if b == 0.0:
		if a == 0.0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b

ARITHMETIC = {
	AdditionOp.ADD: lambda a, b: a + b,
	AdditionOp.SUBTRACT: lambda a, b: a - b,
	MultiplicationOp.MULTIPLY: lambda a, b: a * b,
	MultiplicationOp.DIVIDE: divide,
}

RELATIONS = {
	ComparisonOp.LESS: lambda a, b: a < b,
	ComparisonOp.LESS_EQUAL: lambda a, b: a <= b,
	ComparisonOp.GREATER: lambda a, b: a > b,
	ComparisonOp.GREATER_EQUAL: lambda a, b: a >= b,
}

_DISPATCH = {}

class Interpreter:
	globals: Environment   # or an ArenaFrame
	sink: PyCallable[[str], None]
	
	def __init__(self, root=None, sink:PyCallable[[str], None]=print):
		self.globals = Environment() if root is None else root
		self.sink = sink
	
	def interpret(self, stmts:Sequence[syntax.Stmt]):
		""" Run statements at top level. A top-level return ends the run with its value. """
		try:
			for stmt in stmts:
				self.execute(stmt, self.globals)
		except ReturnSignal as rs:
			return rs.value
		except RecursionError:
			raise LoxRuntimeError("stack overflow") from None
	
	def visit(self, host, env):
		# One plain call per node, looked up by exact type, keeps deep recursion cheap.
		try: method = _DISPATCH[type(host)]
		except KeyError: method = _DISPATCH[type(host)] = getattr(Interpreter, "visit_" + type(host).__name__)
		return method(self, host, env)
	
	def execute(self, stmt:syntax.Stmt, env): self.visit(stmt, env)
	
	def evaluate(self, expr:syntax.Expr, env=None):
		return self.visit(expr, self.globals if env is None else env)
	
	def execute_block(self, statements:Sequence[syntax.Stmt], env):
		for stmt in statements:
			self.visit(stmt, env)
	
	# Statements
	
	def visit_Expression(self, it:syntax.Expression, env): self.visit(it.expr, env)
	def visit_Print(self, it:syntax.Print, env): self.sink(display(self.visit(it.expr, env)))
	def visit_Return(self, it:syntax.Return, env): raise ReturnSignal(self.visit(it.value, env))
	def visit_Declaration(self, it:syntax.Declaration, env): env.define(it.name.key(), self.visit(it.initializer, env))
	
	def visit_If(self, it:syntax.If, env):
		if is_truthy(self.visit(it.cond, env)): self.visit(it.then, env)
		elif it.otherwise is not None: self.visit(it.otherwise, env)
	
	def visit_While(self, it:syntax.While, env):
		while is_truthy(self.visit(it.cond, env)):
			self.visit(it.body, env)
	
	def visit_Block(self, it:syntax.Block, env):
		inner = env.child()
		try: self.execute_block(it.statements, inner)
		finally: inner.release()
	
	def _closure(self, name, params, body:syntax.Block, env) -> Function:
		env.retain()
		return Function(name, params, body.statements, env)
	
	def visit_Function(self, it:syntax.Function, env):
		env.define(it.name.key(), self._closure(it.name.text, it.params, it.body, env))
	
	def visit_Class(self, it:syntax.Class, env):
		# Methods see each other by name through a scope of their own.
		members = env.child()
		methods = {}
		for m in it.methods:
			fn = self._closure(m.name.text, m.params, m.body, members)
			members.define(m.name.key(), fn)
			methods[m.name.text] = fn
		members.release()
		env.define(it.name.key(), LoxClass(it.name.text, methods))
	
	# Expressions
	
	def visit_Primary(self, it:syntax.Primary, env): return it.value
	def visit_Grouping(self, it:syntax.Grouping, env): return self.visit(it.inner, env)
	
	def visit_Variable(self, it:syntax.Variable, env):
		value = env.get(it.name.key())
		if value is ABSENT: raise UndefinedVariable(it.name)
		return value
	
	def visit_Assignment(self, it:syntax.Assignment, env):
		value = self.visit(it.value, env)
		if env.assign(it.target.key(), value) is ABSENT: raise UndefinedVariable(it.target)
		return value
	
	def visit_Logical(self, it:syntax.Logical, env):
		lhs = self.visit(it.lhs, env)
		if it.op is LogicalOp.OR:
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs): return lhs
		return self.visit(it.rhs, env)
	
	def visit_Equality(self, it:syntax.Equality, env):
		lhs, rhs = self.visit(it.lhs, env), self.visit(it.rhs, env)
		if type(lhs) is not type(rhs): raise OperandTypeError(it.op.value, lhs, rhs)
		same = numbers_equal(lhs, rhs) if _is_number(lhs) else lhs == rhs
		return same if it.op is EqualityOp.EQUAL else not same
	
	def visit_Comparison(self, it:syntax.Comparison, env):
		lhs, rhs = self.visit(it.lhs, env), self.visit(it.rhs, env)
		if not (_is_number(lhs) and _is_number(rhs)): raise OperandTypeError(it.op.value, lhs, rhs)
		return RELATIONS[it.op](lhs, rhs)
	
	def visit_Addition(self, it:syntax.Addition, env):
		lhs, rhs = self.visit(it.lhs, env), self.visit(it.rhs, env)
		if it.op is AdditionOp.ADD and isinstance(lhs, str) and isinstance(rhs, str): return lhs + rhs
		return self._arithmetic(it.op, lhs, rhs)
	
	def visit_Multiplication(self, it:syntax.Multiplication, env):
		return self._arithmetic(it.op, self.visit(it.lhs, env), self.visit(it.rhs, env))
	
	@staticmethod
	def _arithmetic(op, lhs, rhs):
		if not (_is_number(lhs) and _is_number(rhs)): raise OperandTypeError(op.value, lhs, rhs)
		return ARITHMETIC[op](lhs, rhs)
	
	def visit_Unary(self, it:syntax.Unary, env):
		operand = self.visit(it.operand, env)
		if it.op is UnaryOp.BANG: return not is_truthy(operand)
		if not _is_number(operand): raise UnaryTypeError(it.op.value, operand)
		return -operand
	
	def visit_Call(self, it:syntax.Call, env):
		callee = self.visit(it.callee, env)
		arguments = [self.visit(a, env) for a in it.arguments]
		if not isinstance(callee, Callable): raise NotCallable(callee)
		if len(arguments) != callee.arity(): raise ArityMismatch(callee, callee.arity(), len(arguments))
		return callee.call(self, arguments)
	
	def visit_Lambda(self, it:syntax.Lambda, env):
		return self._closure(None, it.params, it.body, env)
	
	def visit_Get(self, it:syntax.Get, env):
		obj = self.visit(it.obj, env)
		if not isinstance(obj, Instance): raise NotAnInstance(obj, it.field)
		return obj.get(it.field)
	
	def visit_Set(self, it:syntax.Set, env):
		obj = self.visit(it.obj, env)
		if not isinstance(obj, Instance): raise NotAnInstance(obj, it.field)
		value = self.visit(it.value, env)
		obj.set(it.field, value)
		return value
