from pathlib import Path
import io
import unittest
from unittest import mock

from loxley import cmdline
from loxley.diagnostics import Report, Yuck
from loxley.executive import Session

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"

def _good(which, *, arena=False) -> list[str]:
	printed = []
	report = Report(verbose=False)
	session = Session(report, arena=arena, sink=printed.append)
	path = examples / (which + ".lox")
	session.run_text(session.load(path), path)
	report.assert_no_issues("Ostensibly-good example failed.")
	return printed

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """
	
	def test_examples_run_on_both_environments(self):
		for path in sorted(examples.glob("*.lox")):
			for arena in (False, True):
				with self.subTest(path.stem, arena=arena):
					_good(path.stem, arena=arena)
	
	def test_hello_world(self):
		self.assertEqual(["Hello, World!"], _good("hello_world"))
	
	def test_arithmetic(self):
		self.assertEqual(["11", "16", "3", "0.25", "4", "concat", "inf", "true", "true"], _good("arithmetic"))
	
	def test_closures(self):
		self.assertEqual(["global", "global", "1", "2", "1", "18"], _good("closures"))
	
	def test_loops(self):
		self.assertEqual(["55", "120", "zero is true", "empty is true"], _good("loops"))
	
	def test_fibonacci(self):
		printed = _good("fibonacci")
		self.assertEqual(["0", "1", "1", "2", "3", "5", "8", "13"], printed[:8])
		self.assertEqual(["377", "true"], printed[-2:])
	
	def test_classes(self):
		self.assertEqual(["(origin)", "0", "<Point instance>", "<class Point>"], _good("classes"))
	
	def test_arena_stays_compact(self):
		report = Report(verbose=False)
		session = Session(report, arena=True, sink=lambda line: None)
		session.run_text("for (var i = 0; i < 100; i = i + 1) { var j = i; }")
		self.assertLess(len(session.arena), 10)
	
	def test_classes_in_a_loop_leave_no_scopes_behind(self):
		session = Session(Report(verbose=False), arena=True, sink=lambda line: None)
		session.run_text("for (var i = 0; i < 100; i = i + 1) { class A {} }")
		self.assertEqual([0], session.arena.active_scopes())
		self.assertLess(len(session.arena), 10)
	
	def test_closures_nobody_keeps_are_collected(self):
		session = Session(Report(verbose=False), arena=True, sink=lambda line: None)
		session.run_text("for (var i = 0; i < 100; i = i + 1) { var f = fun () { return i; }; f(); }")
		self.assertEqual([0], session.arena.active_scopes())
		self.assertLess(len(session.arena), 10)
	
	def test_closures_still_in_use_survive_collection(self):
		printed = []
		session = Session(Report(verbose=False), arena=True, sink=printed.append)
		session.run_text("fun counter() { var n = 0; fun bump() { n = n + 1; return n; } return bump; } var c = counter();")
		session.run_text("class Box { peek() { return c(); } } var b = Box(); b.f = fun () { return c() * 10; };")
		session.run_text("print c(); print b.peek(); print b.f();")
		self.assertEqual(["1", "2", "30"], printed)
	
	def test_deep_recursion(self):
		for arena in (False, True):
			with self.subTest(arena=arena):
				printed = []
				session = Session(Report(verbose=False), arena=arena, sink=printed.append)
				session.run_text("fun f(n) { if (n < 1) return 0; return f(n - 1) + 1; } print f(1000);")
				self.assertEqual(["1000"], printed)
	
	def test_runaway_recursion_is_a_runtime_error(self):
		report = Report(verbose=False)
		session = Session(report, arena=True, sink=lambda line: None)
		with self.assertRaises(Yuck):
			session.run_text("fun f() { return f(); } f();")
		self.assertFalse(report.ok())
		report.reset()
		session.run_text("var fine = 1;")
		report.assert_no_issues("The session should carry on after a stack overflow.")

class SessionTests(unittest.TestCase):
	
	def test_repl_keeps_state_across_errors(self):
		printed = []
		report = Report(verbose=False)
		session = Session(report, sink=printed.append)
		stdin = io.StringIO('var a = 1;\nprint b;\nprint "x" * 2;\na = a + 1;\nprint a;\n')
		with mock.patch.object(report, "complain_to_console") as complain:
			session.repl(stdin=stdin, stdout=io.StringIO())
		self.assertEqual(2, complain.call_count)
		self.assertEqual(["2"], printed)
		self.assertTrue(report.ok())
	
	def test_dump(self):
		out = io.StringIO()
		Session(Report(verbose=False)).dump("print -123 * (45.7);", out=out)
		self.assertEqual("(Print (* (- 123) (Grouping 45.7)))\n", out.getvalue())

class CommandLineTests(unittest.TestCase):
	
	def test_check_mode(self):
		args = cmdline.parser.parse_args(["--check", str(examples/"closures.lox")])
		with mock.patch("sys.stderr", io.StringIO()) as err:
			self.assertEqual(0, cmdline.run(args))
		self.assertIn("plausible", err.getvalue())
	
	def test_failure_exit_status(self):
		args = cmdline.parser.parse_args([str(base_folder/"zoo/fail/resolve/undefined_in_block.lox")])
		with mock.patch("sys.stderr", io.StringIO()):
			self.assertEqual(1, cmdline.run(args))
	
	def test_missing_file(self):
		args = cmdline.parser.parse_args([str(base_folder/"no/such/file.lox")])
		with mock.patch("sys.stderr", io.StringIO()) as err:
			self.assertEqual(1, cmdline.run(args))
		self.assertIn("no file", err.getvalue())

if __name__ == '__main__':
	unittest.main()
