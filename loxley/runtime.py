"""
Run-time values and run-time errors.

Plain data is plain Python: nil is None, booleans are bool, strings are str,
and every number is a float. Callables and instances get classes of their own.
"""
import math
from typing import Sequence

class LoxRuntimeError(Exception):
	""" Base of everything that can go wrong while a program runs. """

class OperandTypeError(LoxRuntimeError):
	def __init__(self, op:str, lhs, rhs):
		super().__init__(op, lhs, rhs)
		self.op, self.lhs, self.rhs = op, lhs, rhs
	def __str__(self):
		return "invalid operands for operator: %s %s %s" % (literal_text(self.lhs), self.op, literal_text(self.rhs))

class UnaryTypeError(LoxRuntimeError):
	def __init__(self, op:str, operand):
		super().__init__(op, operand)
		self.op, self.operand = op, operand
	def __str__(self):
		return "invalid operand for operator: %s%s" % (self.op, literal_text(self.operand))

class UndefinedVariable(LoxRuntimeError):
	def __init__(self, name):
		super().__init__(name)
		self.name = name
	def __str__(self): return "undefined variable '%s'" % self.name

class UndefinedProperty(LoxRuntimeError):
	def __init__(self, instance, field:str):
		super().__init__(instance, field)
		self.instance, self.field = instance, field
	def __str__(self): return "%s has no property '%s'" % (display(self.instance), self.field)

class NotAnInstance(LoxRuntimeError):
	def __init__(self, value, field:str):
		super().__init__(value, field)
		self.value, self.field = value, field
	def __str__(self): return "only instances have properties, so %s has no '%s'" % (literal_text(self.value), self.field)

class NotCallable(LoxRuntimeError):
	def __init__(self, value):
		super().__init__(value)
		self.value = value
	def __str__(self): return "can only call functions and classes, not %s" % literal_text(self.value)

class ArityMismatch(LoxRuntimeError):
	def __init__(self, callee, expected:int, given:int):
		super().__init__(callee, expected, given)
		self.callee, self.expected, self.given = callee, expected, given
	def __str__(self):
		return "%s expected %d argument(s) but got %d" % (display(self.callee), self.expected, self.given)

class ReturnSignal(Exception):
	""" Not an error: This is how `return` unwinds to its call site. """
	def __init__(self, value):
		super().__init__(value)
		self.value = value

def show_number(n:float) -> str:
	if math.isfinite(n) and n == int(n):
		return str(int(n))
	return repr(n)

def display(value) -> str:
	""" The text `print` shows for a value. """
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if isinstance(value, float): return show_number(value)
	return str(value)

def literal_text(value) -> str:
	""" Like display, but quote strings so error messages are unambiguous. """
	if isinstance(value, str): return '"%s"' % value
	return display(value)

def is_truthy(value) -> bool:
	""" Only nil and false are false. Zero and the empty string are true. """
	return not (value is None or value is False)

class Callable:
	def arity(self) -> int: raise NotImplementedError(type(self))
	def call(self, interpreter, arguments:Sequence): raise NotImplementedError(type(self))

class Primitive(Callable):
	""" A function implemented in Python. """
	def __init__(self, name:str, fn, arity:int):
		self.name, self.fn, self._arity = name, fn, arity
	def arity(self): return self._arity
	def call(self, interpreter, arguments): return self.fn(*arguments)
	def __str__(self): return "<native fn %s>" % self.name

class Function(Callable):
	"""
	A closure: The code of a function, plus the environment in which it was created.
	Each call runs the body in a fresh child of that environment.
	"""
	def __init__(self, name:str, params:Sequence, body:Sequence, closure):
		self.name, self.params, self.body, self.closure = name, tuple(params), tuple(body), closure
	
	def arity(self): return len(self.params)
	
	def call(self, interpreter, arguments):
		env = self.closure.child()
		try:
			for p, a in zip(self.params, arguments):
				env.define(p.key(), a)
			try: interpreter.execute_block(self.body, env)
			except ReturnSignal as rs: return rs.value
		finally:
			env.release()
	
	def captures(self): return (self.closure,)
	
	def __str__(self):
		return "<fn %s>" % self.name if self.name else "<fn>"

class LoxClass(Callable):
	""" Calling a class makes an instance. The class carries its methods by name. """
	def __init__(self, name:str, methods:dict):
		self.name, self.methods = name, methods
	def arity(self): return 0
	def call(self, interpreter, arguments): return Instance(self)
	def find_method(self, field:str):
		return self.methods.get(field)
	def captures(self): return self.methods.values()
	def __str__(self): return "<class %s>" % self.name

class Instance:
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self.fields = {}
	
	def get(self, field:str):
		if field in self.fields: return self.fields[field]
		method = self.klass.find_method(field)
		if method is None: raise UndefinedProperty(self, field)
		return method
	
	def set(self, field:str, value):
		self.fields[field] = value
	
	def captures(self): return (self.klass, *self.fields.values())
	
	def __str__(self): return "<%s instance>" % self.klass.name
