# test_manager.py
import os
import sys
import unittest
import tempfile
from pathlib import Path
from unittest.mock import patch, MagicMock

# Add src directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from PIL import Image

from fakes import RecordingConverter
from phase_change.converters.image import PngToJpegConverter
from phase_change.core.builder import FileConvertBuilder
from phase_change.core.exceptions import (
    ConfigurationError,
    ConversionFailedError,
    NoConversionPathError,
)
from phase_change.core.formats import UNKNOWN, BMP, GIF, JPEG, MP3, PNG, WAV
from phase_change.core.manager import (
    ConversionManager,
    ConversionRequest,
    default_output_path,
    intermediate_path,
)
from phase_change.core.registry import ConverterRegistry


class TestPathHelpers(unittest.TestCase):
    """Test output and intermediate path derivation."""

    def test_default_output_path(self):
        self.assertEqual(default_output_path(Path('/data/photo.png'), JPEG), Path('/data/photo.jpg'))
        self.assertEqual(default_output_path(Path('/data/photo'), BMP), Path('/data/photo.bmp'))

    def test_intermediate_path(self):
        self.assertEqual(intermediate_path(Path('/data/photo.png'), JPEG), Path('/data/temp_photo.jpg'))


class TestConversionManager(unittest.TestCase):
    """Test direct and multi-step conversion orchestration."""

    def setUp(self):
        self.registry = ConverterRegistry()
        self.manager = ConversionManager(self.registry)

    def add(self, source, target, **kwargs):
        converter = RecordingConverter(source, target, **kwargs)
        self.registry.register(converter)
        return converter

    def test_default_registry_used_when_none_given(self):
        manager = ConversionManager()
        self.assertTrue(manager.registry.can_convert(PNG, JPEG))

    def test_register_converter(self):
        converter = RecordingConverter(PNG, JPEG, write_output=False)
        self.manager.register_converter(converter)
        self.assertIs(self.registry.get_converter(PNG, JPEG), converter)

    @patch('builtins.open')
    @patch('pathlib.Path.exists')
    def test_unknown_source_fails_before_filesystem(self, mock_exists, mock_open):
        converter = self.add(PNG, JPEG, write_output=False)

        with self.assertRaises(ConfigurationError):
            self.manager.convert(UNKNOWN, Path('in.png'), JPEG, Path('out.jpg'))

        mock_exists.assert_not_called()
        mock_open.assert_not_called()
        self.assertEqual(converter.calls, [])

    @patch('builtins.open')
    @patch('pathlib.Path.exists')
    def test_unknown_target_fails_before_filesystem(self, mock_exists, mock_open):
        with self.assertRaises(ConfigurationError):
            self.manager.convert(PNG, Path('in.png'), UNKNOWN)

        mock_exists.assert_not_called()
        mock_open.assert_not_called()

    def test_empty_source_name_rejected(self):
        converter = self.add(PNG, JPEG, write_output=False)

        for source_path in ('', '/'):
            with self.assertRaises(ConfigurationError):
                self.manager.convert(PNG, source_path, JPEG)

        self.assertEqual(converter.calls, [])

    def test_direct_conversion_with_explicit_output(self):
        converter = self.add(PNG, JPEG, write_output=False)

        result = self.manager.convert(PNG, 'in.png', JPEG, 'out.jpg')

        self.assertEqual(result, Path('out.jpg'))
        self.assertEqual(converter.calls, [(Path('in.png'), Path('out.jpg'))])

    def test_direct_conversion_derives_output(self):
        converter = self.add(PNG, JPEG, write_output=False)

        result = self.manager.convert(PNG, Path('/data/photo.png'), JPEG)

        self.assertEqual(result, Path('/data/photo.jpg'))
        self.assertEqual(converter.calls, [(Path('/data/photo.png'), Path('/data/photo.jpg'))])

    def test_direct_edge_preferred_over_path(self):
        direct = self.add(PNG, GIF, write_output=False)
        first = self.add(PNG, JPEG, write_output=False)
        second = self.add(JPEG, GIF, write_output=False)

        with patch.object(self.registry, 'find_conversion_path') as mock_find:
            self.manager.convert(PNG, Path('in.png'), GIF, Path('out.gif'))
            mock_find.assert_not_called()

        self.assertEqual(len(direct.calls), 1)
        self.assertEqual(first.calls, [])
        self.assertEqual(second.calls, [])

    def test_no_conversion_path(self):
        self.add(PNG, JPEG, write_output=False)

        with self.assertRaises(NoConversionPathError) as context:
            self.manager.convert(PNG, Path('in.png'), MP3)

        self.assertEqual(context.exception.source, PNG)
        self.assertEqual(context.exception.target, MP3)
        self.assertIn('Image(PNG)', str(context.exception))
        self.assertIn('Audio(MP3)', str(context.exception))

    def test_format_without_edges(self):
        self.add(PNG, JPEG, write_output=False)
        self.add(JPEG, PNG, write_output=False)

        with self.assertRaises(NoConversionPathError):
            self.manager.convert(PNG, Path('in.png'), WAV)

    def test_multi_hop_conversion(self):
        self.add(PNG, JPEG)
        self.add(JPEG, BMP)
        self.add(BMP, GIF)

        with tempfile.TemporaryDirectory() as temp_dir:
            source_path = Path(temp_dir) / 'photo.png'
            source_path.write_text('png data')

            result = self.manager.convert(PNG, source_path, GIF)

            self.assertEqual(result, Path(temp_dir) / 'photo.gif')
            self.assertEqual(result.read_text(), 'gif from temp_temp_photo.bmp')

            first_temp = Path(temp_dir) / 'temp_photo.jpg'
            second_temp = Path(temp_dir) / 'temp_temp_photo.bmp'
            self.assertTrue(first_temp.exists())
            self.assertTrue(second_temp.exists())
            self.assertEqual(self.manager.last_intermediates, [first_temp, second_temp])

    def test_multi_hop_runs_hops_in_order(self):
        first = self.add(PNG, JPEG, write_output=False)
        second = self.add(JPEG, BMP, write_output=False)

        self.manager.convert(PNG, Path('/data/photo.png'), BMP, Path('/out/final.bmp'))

        self.assertEqual(first.calls, [(Path('/data/photo.png'), Path('/data/temp_photo.jpg'))])
        self.assertEqual(second.calls, [(Path('/data/temp_photo.jpg'), Path('/out/final.bmp'))])

    def test_multi_hop_failure_aborts(self):
        first = self.add(PNG, JPEG, write_output=False)
        second = self.add(JPEG, BMP, fail=True, write_output=False)
        third = self.add(BMP, GIF, write_output=False)

        with self.assertRaises(ConversionFailedError):
            self.manager.convert(PNG, Path('/data/photo.png'), GIF)

        self.assertEqual(len(first.calls), 1)
        self.assertEqual(len(second.calls), 1)
        self.assertEqual(third.calls, [])
        self.assertEqual(
            self.manager.last_intermediates,
            [Path('/data/temp_photo.jpg'), Path('/data/temp_temp_photo.bmp')]
        )

    def test_same_type_without_edge_runs_nothing(self):
        converter = self.add(PNG, JPEG, write_output=False)

        result = self.manager.convert(PNG, Path('/data/photo.png'), PNG)

        self.assertEqual(result, Path('/data/photo.png'))
        self.assertEqual(converter.calls, [])

    def test_progress_spans_all_hops(self):
        self.add(PNG, JPEG, write_output=False)
        self.add(JPEG, BMP, write_output=False)
        progress = []

        self.manager.convert(PNG, Path('/data/photo.png'), BMP, progress_callback=progress.append)

        self.assertEqual(progress, [50, 100])

    def test_execute_request(self):
        converter = self.add(PNG, JPEG, write_output=False)
        request = ConversionRequest(PNG, Path('in.png'), JPEG, Path('out.jpg'))

        self.assertEqual(self.manager.execute(request), Path('out.jpg'))
        self.assertEqual(len(converter.calls), 1)


class TestConversionScenarios(unittest.TestCase):
    """End-to-end conversions with the Pillow backend."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.png_path = self.temp_path / 'input.png'
        Image.new('RGB', (10, 10), (0, 128, 255)).save(self.png_path, format='PNG')

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_single_direct_hop(self):
        registry = ConverterRegistry()
        registry.register(PngToJpegConverter())

        output_path = self.temp_path / 'out.jpg'
        result = ConversionManager(registry).convert(PNG, self.png_path, JPEG, output_path)

        self.assertEqual(result, output_path)
        with Image.open(output_path) as img:
            self.assertEqual(img.format, 'JPEG')

    def test_two_hops_with_intermediate(self):
        registry = ConverterRegistry()
        registry.register(PngToJpegConverter())
        final_hop = RecordingConverter(JPEG, BMP)
        registry.register(final_hop)

        result = ConversionManager(registry).convert(PNG, self.png_path, BMP)

        intermediate = self.temp_path / 'temp_input.jpg'
        self.assertEqual(result, self.temp_path / 'input.bmp')
        self.assertTrue(result.exists())
        with Image.open(intermediate) as img:
            self.assertEqual(img.format, 'JPEG')
        self.assertEqual(final_hop.calls, [(intermediate, result)])

    def test_default_registry_chain(self):
        jpeg_path = self.temp_path / 'photo.jpg'
        Image.new('RGB', (10, 10), (200, 10, 10)).save(jpeg_path, format='JPEG')

        result = ConversionManager().convert(JPEG, jpeg_path, BMP)

        with Image.open(result) as img:
            self.assertEqual(img.format, 'BMP')
        self.assertTrue((self.temp_path / 'temp_photo.png').exists())


class TestFileConvertBuilder(unittest.TestCase):
    """Test the fluent conversion front end."""

    def test_builder_direct_conversion(self):
        converter = RecordingConverter(PNG, JPEG, write_output=False)

        result = (
            FileConvertBuilder()
            .from_file(PNG, 'in.png')
            .to_file(JPEG, 'out.jpg')
            .with_registry(ConverterRegistry())
            .with_converter(converter)
            .convert()
        )

        self.assertEqual(result, Path('out.jpg'))
        self.assertEqual(converter.calls, [(Path('in.png'), Path('out.jpg'))])

    def test_custom_converter_overrides_builtin(self):
        converter = RecordingConverter(PNG, JPEG, write_output=False)

        result = FileConvertBuilder().from_file(PNG, '/data/a.png').to_file(JPEG).with_converter(converter).convert()

        self.assertEqual(result, Path('/data/a.jpg'))
        self.assertEqual(len(converter.calls), 1)

    def test_with_converters_chain(self):
        converters = [
            RecordingConverter(WAV, MP3, write_output=False),
            RecordingConverter(MP3, GIF, write_output=False),
        ]

        builder = FileConvertBuilder().with_registry(ConverterRegistry()).with_converters(converters)
        builder.from_file(WAV, '/data/song.wav').to_file(GIF)
        result = builder.convert()

        self.assertEqual(result, Path('/data/song.gif'))
        self.assertEqual(converters[0].calls, [(Path('/data/song.wav'), Path('/data/temp_song.mp3'))])

    def test_unknown_types_rejected(self):
        with self.assertRaises(ConfigurationError):
            FileConvertBuilder().from_file(UNKNOWN, 'in.png').to_file(JPEG).convert()

        with self.assertRaises(ConfigurationError):
            FileConvertBuilder().from_file(PNG, 'in.png').convert()

    def test_unknown_types_touch_nothing(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            source_path = Path(temp_dir) / 'in.png'
            source_path.write_bytes(b'png')
            direct = RecordingConverter(PNG, JPEG)
            first_hop = RecordingConverter(JPEG, BMP)
            registry = ConverterRegistry()
            registry.register(direct)
            registry.register(first_hop)

            builders = [
                FileConvertBuilder().from_file(PNG, source_path).with_registry(registry),
                FileConvertBuilder().from_file(UNKNOWN, source_path).to_file(BMP).with_registry(registry),
            ]
            for builder in builders:
                with patch('builtins.open') as mock_open, patch('pathlib.Path.exists') as mock_exists:
                    with self.assertRaises(ConfigurationError):
                        builder.convert()

                mock_open.assert_not_called()
                mock_exists.assert_not_called()

            self.assertEqual(direct.calls, [])
            self.assertEqual(first_hop.calls, [])
            self.assertEqual(os.listdir(temp_dir), ['in.png'])

    def test_passed_registry_left_unchanged(self):
        shared = ConverterRegistry()
        converter = RecordingConverter(PNG, JPEG, write_output=False)

        builder = FileConvertBuilder().with_registry(shared).with_converter(converter)
        builder.from_file(PNG, 'in.png').to_file(JPEG, 'out.jpg').convert()

        self.assertEqual(len(shared), 0)
        self.assertFalse(shared.can_convert(PNG, JPEG))
        self.assertEqual(converter.calls, [(Path('in.png'), Path('out.jpg'))])

    def test_default_registries_not_shared(self):
        converter = RecordingConverter(PNG, JPEG, write_output=False)
        FileConvertBuilder().from_file(PNG, 'in.png').to_file(JPEG).with_converter(converter).convert()

        self.assertNotIsInstance(ConversionManager().registry.get_converter(PNG, JPEG), RecordingConverter)

    def test_missing_source_rejected(self):
        with self.assertRaises(ConfigurationError):
            FileConvertBuilder().to_file(JPEG).convert()


if __name__ == '__main__':
    unittest.main()
