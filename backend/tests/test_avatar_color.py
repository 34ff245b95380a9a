"""Avatar colors: hash parity with the web client and in-room uniqueness."""

from game.avatar_color import (
    AVATAR_PALETTE,
    get_stable_id,
    get_unique_color,
    get_user_color,
    hash_to_index,
)


def _ids(n: int) -> list[str]:
    return [f"user_{i}" for i in range(n)]


class TestHash:

    def test_known_values(self):
        # "a" -> 97, "ab" -> 97 * 31 + 98 = 3105
        assert hash_to_index("a") == 97 % 12
        assert hash_to_index("ab") == 3105 % 12
        assert hash_to_index("") == 0

    def test_signed_overflow_stays_in_range(self):
        long_id = "user_" + "z" * 200
        assert 0 <= hash_to_index(long_id) < len(AVATAR_PALETTE)

    def test_astral_characters_hash_as_surrogate_pairs(self):
        # U+1F389 encodes as 0xD83C 0xDF89 in UTF-16
        expected = ((0xD83C * 31 + 0xDF89) & 0xFFFFFFFF) % 12
        assert hash_to_index("🎉") == expected

    def test_user_color_is_stable(self):
        assert get_user_color("guest_abc") == get_user_color("guest_abc")
        assert get_user_color("guest_abc") in AVATAR_PALETTE


class TestUniqueColor:

    def test_distinct_up_to_palette_size(self):
        for n in (2, 5, 8, 12):
            ids = _ids(n)
            colors = [get_unique_color(i, ids) for i in ids]
            assert len(set(colors)) == n

    def test_colliding_ids_get_different_colors(self):
        # "a" and "m" differ by 12 code points, so they hash to the same slot
        assert hash_to_index("a") == hash_to_index("m")
        assert get_unique_color("a", ["a", "m"]) != get_unique_color("m", ["a", "m"])

    def test_order_invariant(self):
        ids = _ids(7)
        shuffled = list(reversed(ids))
        for i in ids:
            assert get_unique_color(i, ids) == get_unique_color(i, shuffled)

    def test_more_players_than_colors(self):
        ids = _ids(15)
        colors = [get_unique_color(i, ids) for i in ids]
        assert len(colors) == 15
        assert set(colors) == set(AVATAR_PALETTE)

    def test_duplicates_in_list_are_ignored(self):
        ids = ["a", "m", "a"]
        assert get_unique_color("m", ids) == get_unique_color("m", ["a", "m"])

    def test_non_member_uses_hash_color(self):
        assert get_unique_color("stranger", _ids(4)) == get_user_color("stranger")

    def test_lone_player_keeps_hash_color(self):
        assert get_unique_color("solo", ["solo"]) == get_user_color("solo")


class TestStableId:

    def test_prefers_account_id(self):
        assert get_stable_id("acct_1", "guest_1") == "acct_1"

    def test_falls_back_to_guest(self):
        assert get_stable_id(None, "guest_1") == "guest_1"

    def test_unknown(self):
        assert get_stable_id(None, None) == "unknown"
        assert get_stable_id("", "") == "unknown"
