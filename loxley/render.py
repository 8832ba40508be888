"""
Prefix-form printing of syntax trees, for dumps and for checking the parser.
For example, the expression `-123 * (45.7)` prints as `(* (- 123) (Grouping 45.7))`.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .runtime import show_number

def render(node:syntax.Node) -> str:
	return Render().visit(node)

def _literal(value) -> str:
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if isinstance(value, float): return show_number(value)
	return '"%s"' % value

class Render(Visitor):
	
	def _form(self, head, *parts):
		return "(%s)" % " ".join([head] + [self.visit(p) for p in parts])
	
	def _params(self, params):
		return "(%s)" % ", ".join(str(p) for p in params)
	
	def visit_Assignment(self, it:syntax.Assignment):
		return "(= %s %s)" % (it.target, self.visit(it.value))
	
	def visit_BinaryExpr(self, it:syntax.BinaryExpr):
		return self._form(it.op.value, it.lhs, it.rhs)
	
	def visit_Unary(self, it:syntax.Unary):
		return self._form(it.op.value, it.operand)
	
	def visit_Call(self, it:syntax.Call):
		return "%s(%s)" % (self.visit(it.callee), ", ".join(self.visit(a) for a in it.arguments))
	
	def visit_Primary(self, it:syntax.Primary): return _literal(it.value)
	def visit_Grouping(self, it:syntax.Grouping): return self._form("Grouping", it.inner)
	def visit_Variable(self, it:syntax.Variable): return "(Var %s)" % it.name
	
	def visit_Lambda(self, it:syntax.Lambda):
		return "(Lambda %s %s)" % (self._params(it.params), self.visit(it.body))
	
	def visit_Get(self, it:syntax.Get):
		return "(. %s %s)" % (self.visit(it.obj), it.field)
	
	def visit_Set(self, it:syntax.Set):
		return "(.= %s %s %s)" % (self.visit(it.obj), it.field, self.visit(it.value))
	
	def visit_Expression(self, it:syntax.Expression): return self._form("Expression", it.expr)
	def visit_Print(self, it:syntax.Print): return self._form("Print", it.expr)
	def visit_Return(self, it:syntax.Return): return self._form("Return", it.value)
	def visit_While(self, it:syntax.While): return self._form("while", it.cond, it.body)
	
	def visit_If(self, it:syntax.If):
		if it.otherwise is None: return self._form("if", it.cond, it.then)
		return self._form("if", it.cond, it.then, it.otherwise)
	
	def visit_Declaration(self, it:syntax.Declaration):
		return "(Declaration %s %s)" % (it.name, self.visit(it.initializer))
	
	def visit_Function(self, it:syntax.Function):
		return "(Function %s %s %s)" % (it.name, self._params(it.params), self.visit(it.body))
	
	def visit_Class(self, it:syntax.Class):
		return " ".join(["(Class %s" % it.name] + [self.visit(m) for m in it.methods]) + ")"
	
	def visit_Block(self, it:syntax.Block):
		return self._form("Block", *it.statements)
