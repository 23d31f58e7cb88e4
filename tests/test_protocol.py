"""Tests for the pyyeelight wire codec."""

import json

import pytest

from pyyeelight import (
    Method,
    MessageParser,
    NotificationMessage,
    PowerOnMode,
    ResponseMessage,
    YeelightInvalidOperation,
    YeelightProtocolError,
    decode_line,
    encode_command,
)
from pyyeelight.const import MAX_LINE_LENGTH
from pyyeelight.protocol import encode_response


class TestEncodeCommand:
    """Tests for command encoding."""

    def test_encode_basic(self):
        data = encode_command(1, Method.SET_POWER, ["on", "smooth", 500])
        assert data == b'{"id":1,"method":"set_power","params":["on","smooth",500]}\r\n'

    def test_encode_wire_name(self):
        data = encode_command(7, "set_bright", [80])
        assert json.loads(data) == {"id": 7, "method": "set_bright", "params": [80]}

    def test_encode_without_params(self):
        assert encode_command(3, Method.TOGGLE) == b'{"id":3,"method":"toggle","params":[]}\r\n'

    def test_encode_terminated_with_crlf(self):
        assert encode_command(1, Method.TOGGLE).endswith(b"\r\n")
        assert encode_command(1, Method.TOGGLE).count(b"\r\n") == 1

    def test_encode_enum_parameter(self):
        data = encode_command(2, Method.SET_POWER, ["on", "sudden", 0, PowerOnMode.RGB])
        assert json.loads(data)["params"] == ["on", "sudden", 0, 2]

    def test_encode_bool_parameter(self):
        assert json.loads(encode_command(2, "set_name", [True]))["params"] == [True]

    def test_encode_non_ascii_is_escaped(self):
        data = encode_command(4, Method.SET_NAME, ["küche"])
        data.decode("ascii")
        assert json.loads(data)["params"] == ["küche"]

    def test_encode_none_parameter_fails(self):
        with pytest.raises(YeelightProtocolError):
            encode_command(1, Method.SET_BRIGHTNESS, [None])

    def test_encode_nested_parameter_fails(self):
        with pytest.raises(YeelightProtocolError):
            encode_command(1, Method.SET_SCENE, [["color", 1]])

    def test_encode_unknown_method_fails(self):
        with pytest.raises(YeelightInvalidOperation):
            encode_command(1, "make_coffee", [])


class TestDecodeLine:
    """Tests for line classification."""

    def test_decode_success_response(self):
        msg = decode_line('{"id":3,"result":["ok"]}')
        assert isinstance(msg, ResponseMessage)
        assert msg.id == 3
        assert msg.result == ["ok"]
        assert msg.error is None

    def test_decode_error_response(self):
        msg = decode_line('{"id":5,"error":{"code":-1,"message":"unsupported method"}}')
        assert isinstance(msg, ResponseMessage)
        assert msg.id == 5
        assert msg.error.code == -1
        assert msg.error.message == "unsupported method"

    def test_decode_notification(self):
        msg = decode_line('{"method":"props","params":{"power":"on","bright":"80"}}')
        assert isinstance(msg, NotificationMessage)
        assert msg.method == "props"
        assert msg.params == {"power": "on", "bright": "80"}

    def test_decode_reserved_id(self):
        msg = decode_line('{"id":0,"result":["ok"]}')
        assert isinstance(msg, ResponseMessage)
        assert msg.id == 0

    def test_decode_id_zero_with_method_is_notification(self):
        msg = decode_line('{"id":0,"method":"props","params":{"power":"off"}}')
        assert isinstance(msg, NotificationMessage)

    def test_decode_keeps_raw_line(self):
        line = '{"id":3,"result":["ok"]}'
        assert decode_line(line).raw == line

    def test_decode_invalid_json(self):
        with pytest.raises(YeelightProtocolError):
            decode_line('{"id":3,"result":')

    def test_decode_not_an_object(self):
        with pytest.raises(YeelightProtocolError):
            decode_line('["ok"]')

    def test_decode_no_id_no_method(self):
        with pytest.raises(YeelightProtocolError):
            decode_line('{"result":["ok"]}')

    def test_decode_string_id(self):
        with pytest.raises(YeelightProtocolError):
            decode_line('{"id":"3","result":["ok"]}')

    def test_decode_notification_params_not_object(self):
        with pytest.raises(YeelightProtocolError):
            decode_line('{"method":"props","params":["on"]}')

    def test_response_round_trip(self):
        line = '{"id":3,"result":["ok"]}'
        encoded = encode_response(decode_line(line))
        again = decode_line(encoded.decode().rstrip("\r\n"))
        assert again.id == 3
        assert again.result == ["ok"]


class TestMessageParser:
    """Tests for MessageParser class."""

    def test_single_line(self):
        parser = MessageParser()
        messages = parser.feed(b'{"id":1,"result":["ok"]}\r\n')
        assert len(messages) == 1
        assert messages[0].id == 1

    def test_two_lines_in_one_read(self):
        parser = MessageParser()
        data = (
            b'{"id":1,"result":["ok"]}\r\n'
            b'{"method":"props","params":{"power":"on"}}\r\n'
        )
        messages = parser.feed(data)
        assert len(messages) == 2
        assert isinstance(messages[0], ResponseMessage)
        assert isinstance(messages[1], NotificationMessage)

    def test_empty_fragments_ignored(self):
        parser = MessageParser()
        messages = parser.feed(b'\r\n\r\n{"id":1,"result":["ok"]}\r\n\r\n')
        assert len(messages) == 1

    def test_partial_line_buffered(self):
        parser = MessageParser()
        assert parser.feed(b'{"id":1,"res') == []
        messages = parser.feed(b'ult":["ok"]}\r\n')
        assert len(messages) == 1
        assert messages[0].result == ["ok"]

    def test_reset_drops_partial_line(self):
        parser = MessageParser()
        parser.feed(b'{"id":1,"res')
        parser.reset()
        assert parser.feed(b'{"id":2,"result":["ok"]}\r\n')[0].id == 2

    def test_malformed_line_skipped_and_reported(self):
        errors = []
        parser = MessageParser(error_callback=errors.append)
        data = (
            b'{"id":1,"result":["ok"]}\r\n'
            b"garbage\r\n"
            b'{"id":2,"result":["ok"]}\r\n'
        )
        messages = parser.feed(data)
        assert [m.id for m in messages] == [1, 2]
        assert len(errors) == 1
        assert isinstance(errors[0], YeelightProtocolError)

    def test_invalid_encoding_reported(self):
        errors = []
        parser = MessageParser(error_callback=errors.append)
        assert parser.feed(b"\xff\xfe\r\n") == []
        assert len(errors) == 1

    def test_order_preserved(self):
        parser = MessageParser()
        data = b"".join(
            f'{{"id":{i},"result":["ok"]}}\r\n'.encode() for i in range(1, 6)
        )
        assert [m.id for m in parser.feed(data)] == [1, 2, 3, 4, 5]

    def test_unterminated_data_dropped(self):
        errors = []
        parser = MessageParser(error_callback=errors.append)
        assert parser.feed(b"x" * (MAX_LINE_LENGTH + 1)) == []
        assert len(errors) == 1
        assert isinstance(errors[0], YeelightProtocolError)
        # The parser recovers on the next complete line
        assert parser.feed(b'{"id":1,"result":["ok"]}\r\n')[0].id == 1

    def test_long_partial_line_within_limit_kept(self):
        parser = MessageParser()
        line = b'{"id":1,"result":["' + b"a" * (MAX_LINE_LENGTH - 40) + b'"]}'
        assert parser.feed(line) == []
        assert len(parser.feed(b"\r\n")) == 1
