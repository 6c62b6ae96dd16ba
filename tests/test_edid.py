import unittest
from xrandr_utils.errors import ValidationError
from xrandr_utils.xrandr.edid import extract_serial, hex_to_bytes


DECODED = """\
edid-decode (hex):

00 ff ff ff ff ff ff 00 10 ac 5a a0 4c 50 4d 30

Block 0, Base EDID:
  EDID Structure Version & Revision: 1.4
  Vendor & Product Identification:
    Manufacturer: DEL
    Model: 41050
    Serial Number: 810372172
    Made in: week 14 of 2019
  Display Descriptors:
    Display Product Name: 'DELL U2719D'
    Display Product Serial Number: '9KM4ZS2'
"""


class TestHexToBytes(unittest.TestCase):
    def test_decodes_pairs(self):
        self.assertEqual(hex_to_bytes("00ffAb10"), b"\x00\xff\xab\x10")

    def test_ignores_whitespace(self):
        self.assertEqual(hex_to_bytes(" 00 ff\n\tab 1\r\n0 "), b"\x00\xff\xab\x10")

    def test_empty(self):
        self.assertEqual(hex_to_bytes("  "), b"")

    def test_inverts_hex(self):
        data = bytes(range(256))
        self.assertEqual(hex_to_bytes(data.hex()), data)

    def test_odd_length(self):
        with self.assertRaisesRegex(ValidationError, "not even"):
            hex_to_bytes("00f")

    def test_invalid_pair(self):
        with self.assertRaisesRegex(ValidationError, "invalid hex pair: g0"):
            hex_to_bytes("00g0")
        with self.assertRaisesRegex(ValidationError, "invalid hex pair: \\+f"):
            hex_to_bytes("+f")


class TestExtractSerial(unittest.TestCase):
    def test_product_serial_wins(self):
        self.assertEqual(extract_serial(DECODED), "9KM4ZS2")

    def test_quoted_label_wins_regardless_of_order(self):
        report = "Serial Number: ABC123\nDisplay Product Serial Number: 'XYZ999'\n"
        self.assertEqual(extract_serial(report), "XYZ999")

    def test_falls_back_to_serial_number(self):
        report = "Display Product Name: 'DELL'\n    Serial Number:  ABC123 \n"
        self.assertEqual(extract_serial(report), "ABC123")

    def test_falls_back_to_alphanumeric_string(self):
        report = "Serial Number:   \nAlphanumeric Data String: ' 1A2B '\n"
        self.assertEqual(extract_serial(report), "1A2B")

    def test_first_matching_line_wins(self):
        report = "Serial Number: first\nSerial Number: second\n"
        self.assertEqual(extract_serial(report), "first")

    def test_not_found(self):
        self.assertIsNone(extract_serial(""))
        self.assertIsNone(extract_serial("Manufacturer: DEL\nModel: 41050\n"))
        self.assertIsNone(extract_serial("Alphanumeric Data String: '   '\n"))


if __name__ == "__main__":
    unittest.main()
