import json
import os
import tempfile
import unittest

from pcgrand.engine import Pcg32, Pcg32Fast, Pcg32Oneseq, Pcg32Unique, Pcg64, make_pcg
from pcgrand.errors import StateValidationError, UnknownAlgorithmError
from pcgrand.extension import Pcg32Ext
from pcgrand.multiplier import McgMultiplier
from pcgrand.outputmix import DXsMMixin, XshRrMixin
from pcgrand.serialization import (
    MAGIC_HEADER,
    PcgStateInfo,
    from_dict,
    from_json,
    get_state,
    load_state,
    restore_state,
    save_state,
    to_dict,
    to_json,
)
from pcgrand.stream import SpecificSeqStream


def draws(rng, n=50):
    return [rng.next_u64() for _ in range(n)]


class TestStateRecords(unittest.TestCase):
    def test_get_state(self):
        info = get_state(Pcg32(11, 12))
        self.assertEqual(info, PcgStateInfo(state=11, stream=13, algorithm='SetseqXshRr6432'))

    def test_dict_round_trip_continues_the_sequence(self):
        for cls in (Pcg32, Pcg32Oneseq, Pcg32Fast, Pcg64):
            rng = cls.new_unseeded()
            rng.next_u32()
            restored = from_dict(to_dict(rng))
            self.assertIs(type(restored), cls)
            self.assertEqual(draws(restored), draws(rng))

    def test_json_round_trip(self):
        rng = Pcg64.new_unseeded()
        text = to_json(rng)
        self.assertEqual(set(json.loads(text)), {'state', 'stream', 'algorithm'})
        self.assertEqual(draws(from_json(text)), draws(rng))

    def test_only_engines_have_state(self):
        with self.assertRaises(TypeError):
            get_state(Pcg32Ext.new_unseeded())

    def test_rebuilt_registered_generator_can_be_saved(self):
        cls = make_pcg(SpecificSeqStream, XshRrMixin, 64, 32, name='MyPcg32')
        rng = cls(11, 12)
        restored = from_json(to_json(rng))
        self.assertIs(type(restored), Pcg32)
        self.assertEqual(draws(restored), draws(rng))

    def test_unregistered_generator_fails_when_saved(self):
        """A record that could not be read back is refused up front."""
        unregistered = make_pcg(SpecificSeqStream, DXsMMixin, 128, 128)
        with self.assertRaises(UnknownAlgorithmError):
            to_json(unregistered.new_unseeded())

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "state.pcg")
            with self.assertRaises(StateValidationError):
                save_state(unregistered.new_unseeded(), path)
            self.assertFalse(os.path.exists(path))

    def test_registered_tag_with_other_multiplier_fails_when_saved(self):
        cls = make_pcg(SpecificSeqStream, XshRrMixin, 64, 32, multiplier_type=McgMultiplier)
        self.assertEqual(cls.tag, Pcg32.tag)
        with self.assertRaises(StateValidationError):
            get_state(cls.new_unseeded())


class TestValidation(unittest.TestCase):
    def record(self, **changes):
        data = {'state': 1, 'stream': 3, 'algorithm': 'SetseqXshRr6432'}
        data.update(changes)
        return data

    def test_even_stream_rejected(self):
        with self.assertRaises(StateValidationError):
            from_dict(self.record(stream=4))

    def test_out_of_range_rejected(self):
        with self.assertRaises(StateValidationError):
            from_dict(self.record(state=1 << 64))
        with self.assertRaises(StateValidationError):
            from_dict(self.record(state=-1))
        with self.assertRaises(StateValidationError):
            from_dict(self.record(stream=(1 << 64) + 1))

    def test_non_integer_rejected(self):
        for value in ('1', 1.0, True, None):
            with self.assertRaises(StateValidationError):
                from_dict(self.record(state=value))

    def test_unknown_algorithm(self):
        with self.assertRaises(UnknownAlgorithmError):
            from_dict(self.record(algorithm='Xorshift32'))
        # Unknown algorithms are still validation failures
        with self.assertRaises(StateValidationError):
            from_dict(self.record(algorithm='Xorshift32'))
        with self.assertRaises(StateValidationError):
            from_dict(self.record(algorithm=6432))

    def test_field_set_must_match(self):
        data = self.record()
        del data['stream']
        with self.assertRaises(StateValidationError):
            from_dict(data)
        with self.assertRaises(StateValidationError):
            from_dict(self.record(extra=1))

    def test_oneseq_stream_is_fixed(self):
        with self.assertRaises(StateValidationError):
            from_dict(self.record(algorithm='OneseqXshRr6432', stream=3))

    def test_mcg_stream_must_be_zero(self):
        self.assertEqual(from_dict(self.record(algorithm='McgXshRs6432', stream=0)).increment, 0)
        with self.assertRaises(StateValidationError):
            from_dict(self.record(algorithm='McgXshRs6432', stream=1))

    def test_unique_cannot_be_restored(self):
        info = get_state(Pcg32Unique(5))
        with self.assertRaises(StateValidationError):
            restore_state(info)

    def test_bad_json(self):
        for text in ('{not json', '[1, 2, 3]'):
            with self.assertRaises(StateValidationError):
                from_json(text)


class TestStateFile(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "state.pcg")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_round_trip(self):
        """Save a generator mid-sequence and pick it up from the file."""
        rng = Pcg64.new_unseeded()
        for _ in range(10):
            rng.next_u64()

        save_state(rng, self.path)
        restored = load_state(self.path)

        self.assertEqual(restored, rng)
        self.assertEqual(draws(restored), draws(rng))

    def test_layout(self):
        save_state(Pcg32(11, 12), self.path)
        with open(self.path, 'rb') as f:
            data = f.read()
        tag = b'SetseqXshRr6432'
        self.assertEqual(data[:4], MAGIC_HEADER)
        self.assertEqual(data[4], len(tag))
        self.assertEqual(data[5:5 + len(tag)], tag)
        self.assertEqual(len(data), 5 + len(tag) + 16)

    def test_bad_magic(self):
        with open(self.path, 'wb') as f:
            f.write(b'NSP1' + bytes(40))
        with self.assertRaises(StateValidationError):
            load_state(self.path)

    def test_truncated_payload(self):
        save_state(Pcg32(11, 12), self.path)
        with open(self.path, 'rb') as f:
            data = f.read()
        for cut in (4, len(data) - 1):
            with open(self.path, 'wb') as f:
                f.write(data[:cut])
            with self.assertRaises(StateValidationError):
                load_state(self.path)

    def test_even_stream_in_file_rejected(self):
        save_state(Pcg32(11, 12), self.path)
        with open(self.path, 'rb') as f:
            data = bytearray(f.read())
        # Clear the low bit of the stream
        data[-8] &= 0xFE
        with open(self.path, 'wb') as f:
            f.write(data)
        with self.assertRaises(StateValidationError):
            load_state(self.path)


if __name__ == '__main__':
    unittest.main()
