import unittest

from field_locator import (
    IssueType,
    LineKind,
    Priority,
    Section,
    classify_issue_type,
    classify_line,
    classify_priority,
    find_environment_token,
    is_section_boundary,
    split_lines,
)


class TestClassifyLine(unittest.TestCase):
    def test_label_line(self):
        line = classify_line("Environment: Chrome 120")
        self.assertIs(line.kind, LineKind.LABEL)
        self.assertIs(line.section, Section.ENVIRONMENT)
        self.assertEqual(line.rest, "Chrome 120")

    def test_label_offsets_point_into_original(self):
        raw = "  Env: X"
        line = classify_line(raw, offset=10)
        self.assertEqual(line.start, 12)
        self.assertEqual(line.rest_start, 17)
        self.assertEqual(line.end, 18)

    def test_longer_alias_wins(self):
        line = classify_line("Expected result: page loads")
        self.assertIs(line.section, Section.EXPECTED)
        self.assertEqual(line.rest, "page loads")
        self.assertIs(classify_line("What happens: crash").section, Section.ACTUAL)
        self.assertIs(classify_line("Steps to reproduce:").section, Section.STEPS)

    def test_label_is_case_insensitive(self):
        line = classify_line("PRIORITY: high")
        self.assertIs(line.section, Section.PRIORITY)

    def test_numbered_line(self):
        line = classify_line("3. Tap login")
        self.assertIs(line.kind, LineKind.NUMBERED)
        self.assertEqual(line.number, 3)
        self.assertEqual(line.rest, "Tap login")

    def test_bare_number_is_plain(self):
        self.assertIs(classify_line("1.").kind, LineKind.PLAIN)

    def test_plain_and_blank(self):
        self.assertIs(classify_line("Just some text").kind, LineKind.PLAIN)
        self.assertIs(classify_line("   \t").kind, LineKind.BLANK)

    def test_non_breaking_space_after_colon(self):
        raw = "Definition of Done:\u00a0Tests pass"
        line = classify_line(raw)
        self.assertIs(line.section, Section.DEFINITION_OF_DONE)
        self.assertEqual(line.rest, "Tests pass")
        self.assertEqual(raw[line.rest_start : line.rest_end], "Tests pass")

        numbered = classify_line("2.\u2003Tap save")
        self.assertIs(numbered.kind, LineKind.NUMBERED)
        self.assertEqual(numbered.rest, "Tap save")

    def test_label_after_bullet_marker(self):
        raw = "- Expected: Users see dashboard"
        line = classify_line(raw)
        self.assertIs(line.kind, LineKind.LABEL)
        self.assertIs(line.section, Section.EXPECTED)
        self.assertEqual(raw[line.rest_start : line.rest_end], "Users see dashboard")

        bare = classify_line("• Notes:")
        self.assertIs(bare.section, Section.DESCRIPTION)
        self.assertEqual(bare.rest, "")
        self.assertIs(classify_line("* Actual: blank").section, Section.ACTUAL)

    def test_label_needs_colon_at_line_start(self):
        self.assertIs(classify_line("The environment is fine").kind, LineKind.PLAIN)
        self.assertIs(classify_line("It should: work").kind, LineKind.PLAIN)


class TestSectionBoundary(unittest.TestCase):
    def test_boundary_labels(self):
        for line in (
            "Priority: High",
            "Notes:",
            "Acceptance Criteria: all green",
            "browser: Firefox",
            "OS: Linux",
            "Should: work",
            "What happens: nothing",
            "DoD:",
        ):
            with self.subTest(line=line):
                self.assertTrue(is_section_boundary(line))

    def test_non_boundary_lines(self):
        for line in ("Steps:", "Title: Foo", "Bug: Crash", "1. Open app", "environment ok"):
            with self.subTest(line=line):
                self.assertFalse(is_section_boundary(line))


class TestSplitLines(unittest.TestCase):
    def test_offsets_with_crlf_and_indent(self):
        text = "Title: A\r\n  1. B"
        lines = split_lines(text)
        self.assertEqual(len(lines), 2)
        self.assertEqual(text[lines[0].start : lines[0].end], "Title: A")
        self.assertEqual(lines[1].start, text.index("1."))
        self.assertEqual(text[lines[1].rest_start : lines[1].rest_end], "B")


class TestClassifiers(unittest.TestCase):
    def test_issue_type_keywords(self):
        self.assertIs(classify_issue_type("The app crashed twice"), IssueType.BUG)
        self.assertIs(classify_issue_type("New enhancement for search"), IssueType.STORY)
        self.assertIs(classify_issue_type("Please implement the export"), IssueType.TASK)

    def test_issue_type_table_order_breaks_ties(self):
        self.assertIs(classify_issue_type("Feature request: crash reporter"), IssueType.BUG)
        self.assertIs(classify_issue_type("todo: feature flag cleanup"), IssueType.STORY)

    def test_issue_type_word_boundaries(self):
        self.assertIs(classify_issue_type("Better multitasking support"), IssueType.BUG)
        self.assertIs(classify_issue_type("Rework the storyboard"), IssueType.BUG)

    def test_priority_keywords(self):
        self.assertIs(classify_priority("this is URGENT"), Priority.HIGH)
        self.assertIs(classify_priority("minor cosmetic glitch"), Priority.LOW)
        self.assertIs(classify_priority("nothing noteworthy"), Priority.MEDIUM)

    def test_priority_table_order_and_boundaries(self):
        self.assertIs(classify_priority("high impact, minor fix"), Priority.HIGH)
        self.assertIs(classify_priority("highlight the slowdown"), Priority.MEDIUM)


class TestEnvironmentToken(unittest.TestCase):
    def test_token_with_version(self):
        self.assertEqual(find_environment_token("Crashes on Android 13.1 only").group(0), "Android 13.1")
        self.assertEqual(find_environment_token("Seen in chrome").group(0), "chrome")
        self.assertEqual(find_environment_token("iPhone 14, iOS 16.5").group(0), "iPhone 14")

    def test_match_span_points_into_text(self):
        text = "It crashes on Android 13 when saving"
        match = find_environment_token(text)
        self.assertEqual(text[match.start() : match.end()], "Android 13")

    def test_no_token(self):
        self.assertIsNone(find_environment_token("No device mentioned here"))


if __name__ == "__main__":
    unittest.main()
