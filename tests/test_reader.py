from xpanda.reader import StrRead
from xpanda.tokens import Position


def test_peek_char_does_not_consume():
    reader = StrRead("hi")
    assert reader.peek_char() == 'h'
    assert reader.peek_char() == 'h'


def test_peek_count_is_clipped():
    reader = StrRead("hello")
    assert reader.peek_count(6) == "hello"
    assert reader.peek_count(4) == "hell"
    assert reader.peek_count(0) == ""


def test_consume_while():
    reader = StrRead("hi!")
    assert reader.consume_while(str.isalpha) == "hi"
    assert reader.consume_while(lambda c: True) == "!"
    assert reader.consume_while(lambda c: True) == ""


def test_position_tracks_lines_and_columns():
    reader = StrRead("a\nb")
    assert reader.position == Position(0, 1, 1)
    reader.consume_char()
    assert reader.position == Position(1, 1, 2)
    reader.consume_char()
    assert reader.position == Position(2, 2, 1)
    reader.consume_char()
    assert reader.position == Position(3, 2, 2)
    assert reader.consume_char() is None
    assert reader.peek_char() is None
    assert reader.position == Position(3, 2, 2)
