import pytest

from game.fallbacks import get_fallback_line
from game.personas import PERSONAS, all_persona_ids, get_persona, pick_random_persona
from game.word_count import count_words


class TestPersonas:

    def test_catalog(self):
        assert all_persona_ids() == [
            "bashō", "dickinson", "cummings",
            "chaotic-gremlin", "overcaffeinated-pal", "deadpan-oracle",
        ]
        for persona in PERSONAS.values():
            assert persona.prompt
            assert persona.tags

    def test_get_persona(self):
        assert get_persona("bashō").display_name == "Bashō"
        assert get_persona("dickinson").display_name == "Emily"

    def test_unknown_persona(self):
        with pytest.raises(KeyError, match="Unknown persona: nobody"):
            get_persona("nobody")

    def test_pick_random_persona_deterministic(self):
        assert pick_random_persona(lambda: 0).id == "bashō"
        assert pick_random_persona(lambda: 7).id == "dickinson"

    def test_pick_random_persona_default(self):
        assert pick_random_persona().id in PERSONAS


class TestFallbackLines:

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
    def test_exact_word_count(self, n):
        assert count_words(get_fallback_line(n)) == n

    def test_unexpected_count_uses_five_word_line(self):
        assert get_fallback_line(9) == get_fallback_line(5)
        assert get_fallback_line(0) == get_fallback_line(5)

