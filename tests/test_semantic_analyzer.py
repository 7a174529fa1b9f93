"""
Test suite for the minilang semantic analyzer.

Tests cover:
- Symbol resolution and scoping
- Error detection and reporting
- Uninitialized-variable warnings
- Symbol table management and dumps
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minilang.parser.parser import parse_string
from minilang.analyzer.semantic_analyzer import SemanticAnalyzer, analyze
from minilang.analyzer.symbol_table import SymbolTable, INT_TYPE
from minilang.analyzer.errors import SemanticError, SemanticErrorKind
from minilang.lexer.tokens import SourceLocation


class TestSemanticAnalyzer(unittest.TestCase):
    """Test cases for the semantic analyzer."""

    def setUp(self):
        """Set up test fixtures."""
        self.output = io.StringIO()
        self.analyzer = SemanticAnalyzer(stream=self.output)

    def _analyze_code(self, code: str):
        """Helper to analyze a code snippet."""
        return self.analyzer.analyze(parse_string(code))

    def test_basic_declaration_and_assignment(self):
        result = self._analyze_code("int x; x = 5; print x;")

        self.assertTrue(result.is_valid)
        self.assertFalse(result.has_errors(), f"Unexpected errors: {result.errors}")
        self.assertFalse(result.has_warnings())

        self.assertEqual(len(result.symbols), 1)
        symbol = result.symbols[0]
        self.assertEqual(symbol.name, "x")
        self.assertEqual(symbol.symbol_type, INT_TYPE)
        self.assertTrue(symbol.is_initialized)
        self.assertEqual(self.output.getvalue(), "")

    def test_redeclaration_in_same_scope(self):
        result = self._analyze_code("int x; int x;")

        self.assertFalse(result.is_valid)
        self.assertEqual(len(result.errors), 1)
        error = result.errors[0]
        self.assertEqual(error.kind, SemanticErrorKind.REDECLARED_VARIABLE)
        self.assertEqual(error.line, 1)
        self.assertIn("Semantic Error at line 1: Variable 'x' already declared in this scope",
                      self.output.getvalue())

    def test_shadowing_in_inner_block(self):
        result = self._analyze_code("int x; { int x; x = 1; } print x;")

        self.assertTrue(result.is_valid)
        self.assertEqual(len(result.warnings), 1)
        warning = result.warnings[0]
        self.assertEqual(warning.kind, SemanticErrorKind.UNINITIALIZED_VARIABLE)
        self.assertIn("Semantic Warning at line 1: Variable 'x' may be used uninitialized",
                      self.output.getvalue())

        # The inner x was discarded with its block; the outer one was never assigned
        self.assertEqual(len(result.symbols), 1)
        self.assertFalse(result.symbols[0].is_initialized)

    def test_undeclared_assignment(self):
        result = self._analyze_code("x = 5;")

        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors[0].kind, SemanticErrorKind.UNDECLARED_VARIABLE)
        self.assertEqual(str(result.errors[0]), "Semantic Error at line 1: Undeclared variable 'x'")

    def test_diagnostic_render_shows_code(self):
        result = self._analyze_code("int x; x = y;")

        rendered = result.errors[0].diagnostic.render()
        self.assertIn("[S001]", rendered)
        self.assertIn("Undeclared variable 'y'", rendered)

    def test_undeclared_assignment_skips_value(self):
        result = self._analyze_code("x = y;")

        # Only the target is reported
        self.assertEqual(len(result.errors), 1)
        self.assertIn("'x'", str(result.errors[0]))

    def test_undeclared_use_in_expression(self):
        result = self._analyze_code("int x;\nx = y + 1;")

        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors[0].line, 2)
        # A failed right-hand side leaves the target uninitialized
        self.assertFalse(result.symbols[0].is_initialized)

    def test_uninitialized_use_is_only_a_warning(self):
        result = self._analyze_code("int x; print x;")

        self.assertTrue(result.is_valid)
        self.assertFalse(result.has_errors())
        self.assertTrue(result.has_warnings())

    def test_self_reference_warns_before_initializing(self):
        result = self._analyze_code("int n; n = n + 1; print n;")

        self.assertTrue(result.is_valid)
        self.assertEqual(len(result.warnings), 1)
        self.assertTrue(result.symbols[0].is_initialized)

    def test_block_symbols_are_not_visible_after_block(self):
        result = self._analyze_code("{ int y; y = 1; }\nprint y;")

        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors[0].line, 2)
        self.assertEqual(result.symbols, [])

    def test_inner_block_sees_outer_variables(self):
        result = self._analyze_code("int x; { x = 2; { print x; } }")

        self.assertTrue(result.is_valid)
        self.assertFalse(result.has_warnings())

    def test_all_errors_are_reported(self):
        code = """
        int a;
        b = 1;
        int a;
        print c;
        """
        result = self._analyze_code(code)

        self.assertFalse(result.is_valid)
        self.assertEqual([e.kind for e in result.errors], [
            SemanticErrorKind.UNDECLARED_VARIABLE,
            SemanticErrorKind.REDECLARED_VARIABLE,
            SemanticErrorKind.UNDECLARED_VARIABLE,
        ])
        self.assertEqual([e.line for e in result.errors], [3, 4, 5])

    def test_both_operands_are_checked(self):
        result = self._analyze_code("print p * q;")
        self.assertEqual(len(result.errors), 2)

    def test_control_flow_statements(self):
        code = """
        int n;
        n = 3;
        if (n > 0) print n;
        while (n != 0) n = n - 1;
        repeat n = n - 1; until (n == 0);
        print factorial(n);
        """
        result = self._analyze_code(code)

        self.assertTrue(result.is_valid, f"Unexpected errors: {result.errors}")
        self.assertFalse(result.has_warnings())

    def test_condition_errors(self):
        result = self._analyze_code("while (k) {}\nif (1) print m;")

        self.assertFalse(result.is_valid)
        self.assertEqual([e.line for e in result.errors], [1, 2])

    def test_repeat_body_declaration_is_not_recorded(self):
        result = self._analyze_code("int y; repeat int y; until (1);")

        # Repeat children are checked as expressions, so nothing is declared
        self.assertTrue(result.is_valid, f"Unexpected errors: {result.errors}")
        self.assertFalse(result.has_errors())
        self.assertEqual([s.name for s in result.symbols], ["y"])

    def test_repeat_condition_sees_no_body_declaration(self):
        result = self._analyze_code("repeat int z; until (z);")

        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors[0].kind, SemanticErrorKind.UNDECLARED_VARIABLE)
        self.assertIn("'z'", str(result.errors[0]))

    def test_repeat_body_assignment_does_not_initialize(self):
        result = self._analyze_code("int x; repeat x = 1; until (x == 1);")

        self.assertTrue(result.is_valid)
        # Both the body target and the condition read an unassigned x
        self.assertEqual(len(result.warnings), 2)
        self.assertFalse(result.symbols[0].is_initialized)

    def test_repeat_body_undeclared_target(self):
        result = self._analyze_code("int n; n = 1; repeat q = 2; until (n);")

        self.assertFalse(result.is_valid)
        self.assertEqual([e.line for e in result.errors], [1])
        self.assertIn("'q'", str(result.errors[0]))

    def test_factorial_name_is_not_looked_up(self):
        result = self._analyze_code("int n; n = 4; print factorial(n);")
        self.assertTrue(result.is_valid)

    def test_factorial_argument_is_checked(self):
        result = self._analyze_code("print factorial(z);")
        self.assertFalse(result.is_valid)

    def test_undeclared_suggestions(self):
        result = self._analyze_code("int count; count = 1; print cout;")

        suggestions = result.errors[0].diagnostic.suggestions
        self.assertIn("Did you mean 'count'?", suggestions)

    def test_redeclaration_points_to_first_declaration(self):
        result = self._analyze_code("int x;\n\nint x;")

        error = result.errors[0]
        self.assertEqual(error.line, 3)
        self.assertEqual(error.related_locations[0].line, 1)
        self.assertIn("line 1", error.diagnostic.help_text)

    def test_analyzer_is_reusable(self):
        self._analyze_code("int x; int x;")
        result = self._analyze_code("int x;")

        self.assertTrue(result.is_valid)
        self.assertEqual(len(result.errors), 0)

    def test_empty_program(self):
        result = self._analyze_code("")
        self.assertTrue(result.is_valid)

    def test_dump_symbols(self):
        analyzer = SemanticAnalyzer(stream=self.output, dump_symbols=True)
        analyzer.analyze(parse_string("int a;\nint b;\nb = 2;"))

        dump = self.output.getvalue()
        self.assertIn("== SYMBOL TABLE DUMP ==", dump)
        self.assertIn("Total symbols: 2", dump)
        self.assertIn("  Name: b\n  Type: int\n  Scope Level: 0\n  Line Declared: 2\n  Initialized: Yes", dump)
        self.assertIn("  Name: a", dump)


class TestAnalyzeFunction(unittest.TestCase):
    """Test cases for the boolean entry point."""

    def test_valid_program(self):
        output = io.StringIO()
        self.assertTrue(analyze(parse_string("int x; x = 1;"), stream=output))

    def test_invalid_program(self):
        output = io.StringIO()
        self.assertFalse(analyze(parse_string("x = 1;"), stream=output))
        self.assertTrue(output.getvalue().startswith("Semantic Error at line 1"))

    def test_warnings_keep_program_valid(self):
        output = io.StringIO()
        self.assertTrue(analyze(parse_string("int x; print x;"), stream=output))
        self.assertIn("Semantic Warning", output.getvalue())


class TestSymbolTable(unittest.TestCase):
    """Test cases for scope management."""

    def setUp(self):
        self.table = SymbolTable()
        self.location = SourceLocation("<test>", 1, 1, 0)

    def test_define_and_lookup(self):
        symbol = self.table.define_variable("x", INT_TYPE, self.location)

        self.assertIs(self.table.lookup_symbol("x"), symbol)
        self.assertEqual(symbol.scope_level, 0)
        self.assertFalse(symbol.is_initialized)
        self.assertIsNone(self.table.lookup_symbol("y"))

    def test_redefinition_raises(self):
        self.table.define_variable("x", INT_TYPE, self.location)
        with self.assertRaises(SemanticError) as ctx:
            self.table.define_variable("x", INT_TYPE, self.location)
        self.assertEqual(ctx.exception.kind, SemanticErrorKind.REDECLARED_VARIABLE)

    def test_shadowing_and_exit(self):
        outer = self.table.define_variable("x", INT_TYPE, self.location)
        self.table.enter_scope()
        inner = self.table.define_variable("x", INT_TYPE, self.location)

        self.assertEqual(inner.scope_level, 1)
        self.assertIs(self.table.lookup_symbol("x"), inner)
        self.assertEqual(len(self.table.symbols()), 2)

        discarded = self.table.exit_scope()
        self.assertIn("x", discarded.symbols)
        self.assertIs(self.table.lookup_symbol("x"), outer)
        self.assertEqual(self.table.symbols(), [outer])

    def test_local_lookup(self):
        self.table.define_variable("x", INT_TYPE, self.location)
        self.table.enter_scope()

        self.assertIsNone(self.table.lookup_symbol_local("x"))
        self.assertIsNotNone(self.table.lookup_symbol("x"))

    def test_global_scope_is_never_popped(self):
        self.assertIsNone(self.table.exit_scope())
        self.assertEqual(self.table.current_level, 0)

    def test_similar_names(self):
        for name in ("total", "count", "zzzzzz"):
            self.table.define_variable(name, INT_TYPE, self.location)

        self.assertEqual(self.table.get_similar_names("totl"), ["total"])
        self.assertEqual(self.table.get_similar_names("qqqq"), [])

    def test_dump_empty_table(self):
        output = io.StringIO()
        self.table.dump(output)
        self.assertIn("Total symbols: 0", output.getvalue())


if __name__ == '__main__':
    unittest.main()
