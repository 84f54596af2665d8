import unittest

from repodm.text.normalize import normalize, fingerprint, NormalizedText, NORMALIZATION_VERSION


class NormalizeTest(unittest.TestCase):
    def test_empty(self):
        self.assertEqual('', normalize(''))

    def test_whitespace_only_differences(self):
        self.assertEqual('function f  return 1', normalize('function f() {\n    return 1;\n}'))
        self.assertEqual('function f  return 1', normalize('function f()   {  return 1;   }'))

    def test_whitespace_collapses_before_punctuation_is_removed(self):
        self.assertEqual('function freturn 1', normalize('function f(){return 1;}'))
        self.assertEqual('function f  return 1', normalize('function f() { return 1; }'))

    def test_block_comment_spanning_lines(self):
        source = 'int a = 1; /* first\n second // not a line comment\n */ int b = 2;'
        self.assertEqual('int a = 1 int b = 2', normalize(source))

    def test_block_comment_is_non_greedy(self):
        self.assertEqual('a b c', normalize('a /* x */ b /* y */ c'))

    def test_block_comments_removed_before_line_comments(self):
        # A line comment marker inside a block comment must not swallow the code after the block
        self.assertEqual('x = 1 y = 2', normalize('x = 1 /* see http://example.com */\ny = 2'))

    def test_line_comment_ends_at_newline(self):
        self.assertEqual('a = 1 b = 2', normalize('a = 1 // one\nb = 2 // two'))

    def test_hash_comment(self):
        self.assertEqual('import os x = 1', normalize('import os  # stdlib\n# whole line\nx = 1'))

    def test_comment_markers_in_strings_are_stripped(self):
        self.assertEqual('url = "http:', normalize('url = "http://example.com"'))
        self.assertEqual('color = "', normalize('color = "#fff"'))

    def test_case_folding(self):
        self.assertEqual('public class foo', normalize('Public Class FOO'))

    def test_structural_punctuation_removed_without_replacement(self):
        self.assertEqual('fab', normalize('f(a,b);'))
        self.assertEqual('x = y.z[0]', normalize('{x = y.z[0]}'))

    def test_trims_and_collapses_whitespace(self):
        self.assertEqual('a b', normalize('\n\t  a \r\n\n   b \t'))

    def test_idempotent(self):
        for source in [
            'function f(){return 1;}',
            'def f(x):\n    return x  # comment\n',
            '/* header */\n#include <stdio.h>\nint main() { return 0; }',
            '',
        ]:
            with self.subTest(source=source):
                once = normalize(source)
                self.assertEqual(once, normalize(once))


class NormalizedTextTest(unittest.TestCase):
    def test_from_content(self):
        text = NormalizedText.from_content('A = 1;  // set')
        self.assertEqual('a = 1', text.text)
        self.assertEqual(fingerprint('a = 1'), text.fingerprint)
        self.assertEqual(NORMALIZATION_VERSION, text.version)

    def test_equal_content_after_normalization_has_equal_fingerprint(self):
        a = NormalizedText.from_content('f() { return 1; }')
        b = NormalizedText.from_content('f()  {\n  return 1;\n}')
        self.assertEqual(a, b)

    def test_different_texts_have_different_fingerprints(self):
        self.assertNotEqual(fingerprint('a=1'), fingerprint('a=2'))


if __name__ == '__main__':
    unittest.main()
