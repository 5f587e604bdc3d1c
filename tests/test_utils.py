import unittest
import numpy as np
from PIL import Image
from src.utils import default_cache_key, make_cache_key, map_not_none_values, values_equal

class Unprintable:
    def __str__(self):
        raise RuntimeError("no string form")

class TestUtils(unittest.TestCase):
    def test_map_not_none_values(self):
        result = map_not_none_values({"a": 1, "b": None, "c": 3}, lambda k, v: v)
        self.assertEqual(result, {"a": 1, "c": 3})
        self.assertEqual(map_not_none_values({}, lambda k, v: v), {})

    def test_default_cache_key_str(self):
        self.assertEqual(default_cache_key(200), "200")
        self.assertEqual(default_cache_key("blur"), "blur")
        self.assertIsNone(default_cache_key(None))

    def test_default_cache_key_array(self):
        a = np.zeros((64, 64), dtype=np.uint8)
        b = a.copy()
        b[32, 32] = 1
        self.assertTrue(default_cache_key(a).startswith("ndarray:uint8:(64, 64):"))
        self.assertEqual(default_cache_key(a), default_cache_key(a.copy()))
        self.assertNotEqual(default_cache_key(a), default_cache_key(b))

    def test_default_cache_key_image(self):
        img = Image.new("RGB", (8, 8), (255, 0, 0))
        same = Image.new("RGB", (8, 8), (255, 0, 0))
        other = Image.new("RGB", (8, 8), (0, 255, 0))
        self.assertEqual(default_cache_key(img), default_cache_key(same))
        self.assertNotEqual(default_cache_key(img), default_cache_key(other))
        self.assertNotIn("0x", default_cache_key(img))

    def test_default_cache_key_palette_image(self):
        red = Image.new("P", (4, 4), 0)
        red.putpalette([255, 0, 0] * 256)
        green = Image.new("P", (4, 4), 0)
        green.putpalette([0, 255, 0] * 256)
        self.assertEqual(red.tobytes(), green.tobytes())
        self.assertNotEqual(default_cache_key(red), default_cache_key(green))

    def test_default_cache_key_failure(self):
        with self.assertLogs(level="ERROR"):
            self.assertIsNone(default_cache_key(Unprintable()))

    def test_default_cache_key_address_warning(self):
        with self.assertLogs(level="WARNING"):
            key = default_cache_key(object())
        self.assertIn(" at 0x", key)

    def test_values_equal(self):
        self.assertTrue(values_equal(np.eye(3), np.eye(3)))
        self.assertFalse(values_equal(np.eye(3), np.zeros((3, 3))))
        self.assertTrue(values_equal(1, 1.0))
        self.assertFalse(values_equal("a", "b"))

    def test_values_equal_nested(self):
        self.assertTrue(values_equal([np.ones(3)], [np.ones(3)]))
        self.assertFalse(values_equal([np.ones(3)], [np.zeros(3)]))
        self.assertTrue(values_equal({"a": (np.eye(2), 1)}, {"a": (np.eye(2), 1)}))
        self.assertFalse(values_equal({"a": np.eye(2)}, {"b": np.eye(2)}))
        self.assertFalse(values_equal([np.ones(3)], [np.ones(3), 1]))

    def test_make_cache_key(self):
        key = make_cache_key("image.png", (100, 100), {"a": "1", "b": "2"})
        self.assertEqual(key, make_cache_key("image.png", (100, 100), {"b": "2", "a": "1"}))
        self.assertNotEqual(key, make_cache_key("image.png", (100, 100), {"a": "1"}))
        self.assertNotEqual(key, make_cache_key("image.png", None, {"a": "1", "b": "2"}))
        self.assertEqual(make_cache_key("image.png"), make_cache_key("image.png", None, {}))

if __name__ == "__main__":
    unittest.main()
