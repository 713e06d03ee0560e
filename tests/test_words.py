from townhub.games import words


def test_missing_file_uses_fallback(tmp_path):
    assert words.load_word_list(tmp_path / "nope.txt") == list(words.FALLBACK_WORDS)


def test_file_words_are_normalized_and_filtered(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("Apple\n  crane \ntoolong\nab1de\n\nfour\n", encoding="utf-8")
    assert words.load_word_list(path) == ["apple", "crane"]


def test_file_without_usable_words_uses_fallback(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("cat\ndog\n", encoding="utf-8")
    assert words.load_word_list(path) == list(words.FALLBACK_WORDS)


def test_fallback_words_are_five_letters():
    assert all(len(w) == words.WORD_LENGTH and w.isalpha() for w in words.FALLBACK_WORDS)


def test_random_word_comes_from_list():
    assert words.random_word() in words.get_word_list()


def test_is_valid_word():
    word = words.get_word_list()[0]
    assert words.is_valid_word(word.upper())
    assert not words.is_valid_word("zzzzz")
    assert not words.is_valid_word(word[:4])
