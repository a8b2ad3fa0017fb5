import unittest

import frame_resolver
import ico_parser
from frame_resolver import FrameFormat
from ico_errors import CorruptFrameError, IndexOutOfRangeError
from ico_builder import PNG_SIGNATURE, build_ico, dib_32bpp, pack_entry, pack_header, png_bytes


def _three_frame_icon() -> bytes:
    """16x16 / 32x32 / 48x48 のPNGフレームを持つICO（オフセット 22 / 318 / 1702）"""
    layout = [(16, 22, 296), (32, 318, 1384), (48, 1702, 3752)]
    data = bytearray(1702 + 3752)
    for offset_in_file, (size_px, offset, size) in zip(range(6, 54, 16), layout):
        data[offset_in_file:offset_in_file + 16] = pack_entry(size_px, size_px, size=size, offset=offset)
    data[0:6] = pack_header(count=3)
    data[318:318 + 8] = PNG_SIGNATURE
    data[1702:1702 + 8] = PNG_SIGNATURE
    return bytes(data)


class TestResolve(unittest.TestCase):

    def test_resolve_embedded_png_frame(self):
        """index 1 は32x32のPNGで、318..1702 の範囲を指す"""
        data = _three_frame_icon()
        _, descriptors = ico_parser.parse(data)

        frame = frame_resolver.resolve(descriptors, data, 1)

        self.assertIs(frame.tag, FrameFormat.EMBEDDED_PNG)
        self.assertEqual(frame.width, 32)
        self.assertEqual(frame.height, 32)
        self.assertEqual(frame.index, 1)
        self.assertEqual(bytes(frame.data), data[318:1702])
        self.assertTrue(frame.data.readonly)

    def test_resolve_raw_bitmap_frame(self):
        data = build_ico([(2, 2, dib_32bpp([[(255, 0, 0, 255)] * 2] * 2))])
        _, descriptors = ico_parser.parse(data)

        frame = frame_resolver.resolve(descriptors, data, 0)

        self.assertIs(frame.tag, FrameFormat.RAW_BITMAP)
        self.assertEqual(frame.bit_count, 32)

    def test_index_out_of_range(self):
        data = _three_frame_icon()
        _, descriptors = ico_parser.parse(data)

        with self.assertRaises(IndexOutOfRangeError) as ctx:
            frame_resolver.resolve(descriptors, data, 5)

        self.assertEqual(ctx.exception.requested, 5)
        self.assertEqual(ctx.exception.available, 3)

    def test_empty_container_always_out_of_range(self):
        data = pack_header(count=0)
        _, descriptors = ico_parser.parse(data)

        with self.assertRaises(IndexOutOfRangeError) as ctx:
            frame_resolver.resolve(descriptors, data, 0)

        self.assertEqual(ctx.exception.requested, 0)
        self.assertEqual(ctx.exception.available, 0)

    def test_corrupt_frame_does_not_block_other_frames(self):
        """範囲外のフレームは要求されたときだけエラーになる"""
        payload = png_bytes()
        data = (
            pack_header(count=2)
            + pack_entry(16, 16, size=len(payload), offset=38)
            + pack_entry(32, 32, size=len(payload) + 1, offset=38)
            + payload
        )
        _, descriptors = ico_parser.parse(data)

        frame = frame_resolver.resolve(descriptors, data, 0)
        self.assertEqual(bytes(frame.data), payload)

        with self.assertRaises(CorruptFrameError) as ctx:
            frame_resolver.resolve(descriptors, data, 1)
        self.assertEqual(ctx.exception.index, 1)


class TestDetectFrameFormat(unittest.TestCase):

    def test_png_signature(self):
        self.assertIs(frame_resolver.detect_frame_format(PNG_SIGNATURE + b"rest"), FrameFormat.EMBEDDED_PNG)

    def test_bitmap_header(self):
        self.assertIs(frame_resolver.detect_frame_format(b"\x28\x00\x00\x00" + b"\x00" * 36), FrameFormat.RAW_BITMAP)

    def test_short_or_empty_payload(self):
        self.assertIs(frame_resolver.detect_frame_format(PNG_SIGNATURE[:7]), FrameFormat.RAW_BITMAP)
        self.assertIs(frame_resolver.detect_frame_format(b""), FrameFormat.RAW_BITMAP)

    def test_accepts_memoryview(self):
        view = memoryview(b"xx" + PNG_SIGNATURE)[2:]
        self.assertIs(frame_resolver.detect_frame_format(view), FrameFormat.EMBEDDED_PNG)


if __name__ == '__main__':
    unittest.main()
