from game.room_code import format_room_code, generate_room_code, normalize_room_code


class TestRoomCode:

    def test_generate(self):
        for _ in range(50):
            code = generate_room_code()
            assert len(code) == 4
            assert code.isalpha() and code.isupper() and code.isascii()

    def test_format(self):
        assert format_room_code("ABCD") == "AB CD"
        assert format_room_code("AB12CD") == "AB 12 CD"
        assert format_room_code("") == ""

    def test_normalize(self):
        assert normalize_room_code("ab cd") == "ABCD"
        assert normalize_room_code(" wxyz ") == "WXYZ"
