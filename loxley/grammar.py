"""
The grammar of the language, as a cascade of combinators.

Expressions climb from lowest to highest binding:
	assignment, or, and, equality, comparison, addition, multiplication, unary, call, primary.
Each binary level reads one operand from the level above, then any number of
(operator, operand) pairs, and folds them into a left-leaning tree: `a - b - c` means `(a - b) - c`.

Keywords and opening brackets commit the grammar to a construct.
Past that point, a missing piece is a ParseError rather than a quiet NoMatch.
"""
from typing import Sequence
from . import syntax
from .ontology import Name
from .tokens import TokenKind as T, Token
from .combinators import (
	Parser, Match, NoMatch, ParseError,
	kind, one_of, sequence, left, right, alternative,
	zero_or_more, optional, separated, commit, lazy,
)

def _expect(k:T, what:str) -> Parser:
	return commit(kind(k), what)

def _name(token:Token) -> Name:
	return Name(token.literal, token.span)

###############################################################################
# Expressions

expression = lazy(lambda: assignment, "expression")

literal = alternative(
	kind(T.TRUE).map(lambda t: syntax.Primary(True)),
	kind(T.FALSE).map(lambda t: syntax.Primary(False)),
	kind(T.NIL).map(lambda t: syntax.Primary(None)),
	kind(T.NUMBER).map(lambda t: syntax.Primary(float(t.literal))),
	kind(T.STRING).map(lambda t: syntax.Primary(t.literal)),
)

variable = kind(T.IDENTIFIER).map(lambda t: syntax.Variable(_name(t)))

grouping = right(
	kind(T.LEFT_PAREN),
	left(commit(expression, "an expression after '('"), _expect(T.RIGHT_PAREN, "')' to close the group")),
).map(syntax.Grouping)

parameters = left(
	separated(kind(T.IDENTIFIER).map(_name), kind(T.COMMA)),
	_expect(T.RIGHT_PAREN, "')' after parameters"),
)

block = right(
	kind(T.LEFT_BRACE),
	left(zero_or_more(lazy(lambda: statement, "statement")), _expect(T.RIGHT_BRACE, "'}' to close the block")),
).map(syntax.Block)

function_body = commit(block, "'{' to begin the function body")

lambda_expr = right(
	sequence(kind(T.FUN), kind(T.LEFT_PAREN)),
	sequence(parameters, function_body),
).map(lambda parts: syntax.Lambda(*parts))

primary = alternative(literal, variable, grouping, lambda_expr)

arguments = right(
	kind(T.LEFT_PAREN),
	left(separated(expression, kind(T.COMMA)), _expect(T.RIGHT_PAREN, "')' after arguments")),
).map(lambda args: (syntax.Call, args))

property_name = right(
	kind(T.DOT),
	_expect(T.IDENTIFIER, "a property name after '.'"),
).map(lambda t: (syntax.Get, t.literal))

def _apply_suffixes(parts):
	tree, suffixes = parts
	for ctor, detail in suffixes:
		tree = ctor(tree, detail)
	return tree

call = sequence(primary, zero_or_more(alternative(arguments, property_name))).map(_apply_suffixes)

def _unary(parts):
	token, operand = parts
	op = syntax.UnaryOp.BANG if token.kind is T.BANG else syntax.UnaryOp.MINUS
	return syntax.Unary(op, operand)

unary = alternative(
	sequence(one_of(T.BANG, T.MINUS), commit(lazy(lambda: unary, "unary"), "an operand")).map(_unary),
	call,
)

BINARY_OPERATORS = {
	T.OR: (syntax.Logical, syntax.LogicalOp.OR),
	T.AND: (syntax.Logical, syntax.LogicalOp.AND),
	T.EQUAL_EQUAL: (syntax.Equality, syntax.EqualityOp.EQUAL),
	T.BANG_EQUAL: (syntax.Equality, syntax.EqualityOp.NOT_EQUAL),
	T.LESS: (syntax.Comparison, syntax.ComparisonOp.LESS),
	T.LESS_EQUAL: (syntax.Comparison, syntax.ComparisonOp.LESS_EQUAL),
	T.GREATER: (syntax.Comparison, syntax.ComparisonOp.GREATER),
	T.GREATER_EQUAL: (syntax.Comparison, syntax.ComparisonOp.GREATER_EQUAL),
	T.PLUS: (syntax.Addition, syntax.AdditionOp.ADD),
	T.MINUS: (syntax.Addition, syntax.AdditionOp.SUBTRACT),
	T.STAR: (syntax.Multiplication, syntax.MultiplicationOp.MULTIPLY),
	T.SLASH: (syntax.Multiplication, syntax.MultiplicationOp.DIVIDE),
}

def fold_left(first:syntax.Expr, pairs:Sequence) -> syntax.Expr:
	"""
	Each (operator, operand) pair takes everything to its left as its left operand,
	so the leftmost pair ends up innermost.
	"""
	tree = first
	for token, operand in pairs:
		ctor, op = BINARY_OPERATORS[token.kind]
		tree = ctor(op, tree, operand)
	return tree

def binary_level(operand:Parser, *kinds:T) -> Parser:
	pair = sequence(one_of(*kinds), commit(operand, "an operand after the operator"))
	return sequence(operand, zero_or_more(pair)).map(lambda parts: fold_left(*parts))

multiplication = binary_level(unary, T.STAR, T.SLASH)
addition = binary_level(multiplication, T.PLUS, T.MINUS)
comparison = binary_level(addition, T.LESS, T.LESS_EQUAL, T.GREATER, T.GREATER_EQUAL)
equality = binary_level(comparison, T.EQUAL_EQUAL, T.BANG_EQUAL)
logical_and = binary_level(equality, T.AND)
logical_or = binary_level(logical_and, T.OR)

def _assignment(tokens, at):
	"""
	Read what might be a target. If an '=' follows, it had better be something assignable.
	Assignment is right-associative: `a = b = c` assigns c to b, then to a.
	"""
	target = logical_or(tokens, at)
	if isinstance(target, NoMatch): return target
	equals = kind(T.EQUAL)(tokens, target.at)
	if isinstance(equals, NoMatch): return target
	lhs = target.value
	if not isinstance(lhs, (syntax.Variable, syntax.Get)):
		raise ParseError("an assignable target before '='", tokens, at)
	value = commit(assignment, "an expression after '='")(tokens, equals.at)
	if isinstance(lhs, syntax.Variable): node = syntax.Assignment(lhs.name, value.value)
	else: node = syntax.Set(lhs.obj, lhs.field, value.value)
	return Match(tokens, value.at, node)

assignment = Parser(_assignment, "assignment")

###############################################################################
# Statements

semicolon = _expect(T.SEMICOLON, "';'")

expression_stmt = left(expression, semicolon).map(syntax.Expression)

print_stmt = right(
	kind(T.PRINT),
	left(commit(expression, "an expression after 'print'"), semicolon),
).map(syntax.Print)

def _declaration(parts):
	name, initializer = parts
	if initializer is None: initializer = syntax.Primary(None)
	return syntax.Declaration(_name(name), initializer)

var_stmt = right(
	kind(T.VAR),
	left(
		sequence(
			_expect(T.IDENTIFIER, "a variable name after 'var'"),
			optional(right(kind(T.EQUAL), commit(expression, "an initializer after '='"))),
		),
		semicolon,
	),
).map(_declaration)

def _function(parts):
	name, params, body = parts
	return syntax.Function(_name(name), params, body)

# The opening parenthesis after the name is what commits to a function.
method = sequence(
	kind(T.IDENTIFIER),
	right(kind(T.LEFT_PAREN), parameters),
	function_body,
).map(_function)

# Without a name, `fun` begins a lambda in an expression statement instead.
fun_stmt = right(
	kind(T.FUN),
	sequence(
		kind(T.IDENTIFIER),
		right(_expect(T.LEFT_PAREN, "'(' after the function name"), parameters),
		function_body,
	),
).map(_function)

class_stmt = right(
	kind(T.CLASS),
	sequence(
		_expect(T.IDENTIFIER, "a class name after 'class'"),
		right(
			_expect(T.LEFT_BRACE, "'{' to begin the class body"),
			left(zero_or_more(method), _expect(T.RIGHT_BRACE, "'}' to close the class body")),
		),
	),
).map(lambda parts: syntax.Class(_name(parts[0]), parts[1]))

# Defined later; the lazy reference ties the recursive knot.
statement = lazy(lambda: any_statement, "statement")
body_stmt = commit(statement, "a statement")

condition = right(
	_expect(T.LEFT_PAREN, "'(' before the condition"),
	left(commit(expression, "a condition"), _expect(T.RIGHT_PAREN, "')' after the condition")),
)

if_stmt = right(
	kind(T.IF),
	sequence(condition, body_stmt, optional(right(kind(T.ELSE), body_stmt))),
).map(lambda parts: syntax.If(*parts))

while_stmt = right(kind(T.WHILE), sequence(condition, body_stmt)).map(lambda parts: syntax.While(*parts))

def _for_loop(parts):
	initializer, cond, increment, body = parts
	if increment is not None:
		body = syntax.Block([body, syntax.Expression(increment)])
	if cond is None: cond = syntax.Primary(True)
	loop = syntax.While(cond, body)
	if initializer is None: return loop
	return syntax.Block([initializer, loop])

for_initializer = commit(
	alternative(kind(T.SEMICOLON).map(lambda t: None), var_stmt, expression_stmt),
	"a loop initializer",
)

for_stmt = right(
	kind(T.FOR),
	sequence(
		right(_expect(T.LEFT_PAREN, "'(' after 'for'"), for_initializer),
		left(optional(expression), _expect(T.SEMICOLON, "';' after the loop condition")),
		left(optional(expression), _expect(T.RIGHT_PAREN, "')' after the for-clauses")),
		body_stmt,
	),
).map(_for_loop)

return_stmt = right(
	kind(T.RETURN),
	left(optional(expression, syntax.Primary(None)), semicolon),
).map(syntax.Return)

any_statement = alternative(
	var_stmt, class_stmt, fun_stmt, if_stmt, while_stmt, for_stmt,
	return_stmt, print_stmt, block, expression_stmt,
)

statements = zero_or_more(statement)

def parse_program(tokens:Sequence[Token]) -> list[syntax.Stmt]:
	""" All statements, and nothing but. Raises ParseError. """
	result = statements(tokens, 0)
	if result.at < len(tokens):
		raise ParseError("a statement", tokens, result.at)
	return result.value

def parse_expression(tokens:Sequence[Token]) -> syntax.Expr:
	""" Exactly one expression. Raises ParseError. """
	result = expression(tokens, 0)
	if isinstance(result, NoMatch) or result.at < len(tokens):
		raise ParseError("an expression", tokens, result.at)
	return result.value
