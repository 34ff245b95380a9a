from game.word_count_guard import attempt_fix, normalize_text, validate_word_count


class TestNormalizeText:

    def test_removes_surrounding_quotes(self):
        assert normalize_text('"hello world"') == "hello world"
        assert normalize_text("'hello world'") == "hello world"
        assert normalize_text('"test"') == "test"
        assert normalize_text("“curly quotes”") == "curly quotes"

    def test_only_one_layer(self):
        assert normalize_text('""nested""') == '"nested"'

    def test_quotes_outside_whitespace(self):
        assert normalize_text('  "padded"  ') == "padded"

    def test_normalizes_whitespace(self):
        assert normalize_text("hello    world") == "hello world"
        assert normalize_text("  hello  world  ") == "hello world"
        assert normalize_text("one\t\ttwo") == "one two"
        assert normalize_text("one\r\ntwo") == "one two"

    def test_empty_input(self):
        assert normalize_text("") == ""
        assert normalize_text("   ") == ""


class TestValidateWordCount:

    def test_correct_counts(self):
        assert validate_word_count("hello", 1)
        assert validate_word_count("hello world", 2)
        assert validate_word_count('"one two three"', 3)

    def test_incorrect_counts(self):
        assert not validate_word_count("hello", 2)
        assert not validate_word_count("hello world", 1)
        assert not validate_word_count("one two three", 5)

    def test_empty_with_zero_target(self):
        assert validate_word_count("", 0)
        assert validate_word_count("   ", 0)


class TestAttemptFix:

    def test_exact_count_returns_normalized(self):
        assert attempt_fix("hello world", 2) == "hello world"
        assert attempt_fix('"hello world"', 2) == "hello world"
        assert attempt_fix("  one  ", 1) == "one"

    def test_truncates_extra_words(self):
        assert attempt_fix("one two three four", 3) == "one two three"
        assert attempt_fix("a b c d e", 2) == "a b"

    def test_truncation_counts_real_words_only(self):
        fixed = attempt_fix("moss — on stone, quiet", 2)
        assert fixed == "moss — on"
        assert validate_word_count(fixed, 2)

    def test_too_few_words_fails(self):
        assert attempt_fix("one", 3) is None
        assert attempt_fix("hello", 2) is None
        assert attempt_fix("one two", 5) is None

    def test_empty_input(self):
        assert attempt_fix("", 0) == ""
        assert attempt_fix("", 1) is None
