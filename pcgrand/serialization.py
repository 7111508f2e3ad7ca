"""
Saving and restoring generator state.

A generator's state is captured as a PcgStateInfo record
{state, stream, algorithm}. Records can be turned into dicts / JSON, or
written to a small binary .pcg file. Restoring always re-validates the
record and rejects anything malformed instead of repairing it: silently
fixing a stream would change the sequence the caller gets back.
"""
import json
import logging
from dataclasses import asdict, dataclass

from pcgrand.engine import PcgEngine, get_generator
from pcgrand.errors import StateValidationError
from pcgrand.numops import mask
from pcgrand.seeds import decode_seed, encode_seed, seed_size
from pcgrand.stream import NoSeqStream, OneSeqStream, UniqueSeqStream

logger = logging.getLogger(__name__)

MAGIC_HEADER = b'PCG1'  # pcgrand state file v1

FIELDS = ('state', 'stream', 'algorithm')


@dataclass(frozen=True)
class PcgStateInfo:
    state: int
    stream: int
    algorithm: str


def get_state(pcg):
    if not isinstance(pcg, PcgEngine):
        raise TypeError(f"Cannot capture the state of {type(pcg).__name__}")
    # The record only names the tag, so it must restore to an identical generator
    cls = get_generator(pcg.tag)
    if not _same_generator(cls, type(pcg)):
        raise StateValidationError(
            f"{type(pcg).__name__} does not match the registered {pcg.tag} "
            f"generator and could not be restored"
        )
    return PcgStateInfo(state=pcg.state, stream=pcg.increment, algorithm=pcg.tag)


def _same_generator(a, b):
    return all(
        getattr(a, attr) == getattr(b, attr)
        for attr in ('itype_bits', 'xtype_bits', 'stream_type', 'output_type', 'multiplier_type')
    )


def validate_state(info):
    """
    Checks a record against its algorithm and returns the generator class.
    """
    cls = get_generator(info.algorithm)
    limit = mask(cls.itype_bits)
    for field in ('state', 'stream'):
        value = getattr(info, field)
        if not isinstance(value, int) or isinstance(value, bool):
            raise StateValidationError(f"{field} must be an integer, got {value!r}")
        if value < 0 or value > limit:
            raise StateValidationError(
                f"{field} {value:#x} does not fit in {cls.itype_bits} bits"
            )

    if cls.stream_type is UniqueSeqStream:
        raise StateValidationError(
            f"{info.algorithm} uses a unique per-instance stream and cannot be restored"
        )
    if cls.stream_type is NoSeqStream:
        if info.stream != 0:
            raise StateValidationError(
                f"{info.algorithm} is an MCG and must have a zero stream, got {info.stream:#x}"
            )
        return cls

    if info.stream % 2 == 0:
        raise StateValidationError(
            f"Stream {info.stream:#x} is even; {info.algorithm} requires an odd stream"
        )
    if cls.stream_type is OneSeqStream:
        expected = OneSeqStream(cls.itype_bits).increment()
        if info.stream != expected:
            raise StateValidationError(
                f"{info.algorithm} has the fixed stream {expected:#x}, got {info.stream:#x}"
            )
    return cls


def restore_state(info):
    cls = validate_state(info)
    return cls(info.state, info.stream)


def to_dict(pcg):
    return asdict(get_state(pcg))


def from_dict(data):
    missing = [field for field in FIELDS if field not in data]
    if missing:
        raise StateValidationError(f"Missing field(s): {', '.join(missing)}")
    unknown = sorted(set(data) - set(FIELDS))
    if unknown:
        raise StateValidationError(f"Unexpected field(s): {', '.join(unknown)}")
    info = PcgStateInfo(
        state=data['state'], stream=data['stream'], algorithm=data['algorithm']
    )
    if not isinstance(info.algorithm, str):
        raise StateValidationError(f"algorithm must be a string, got {info.algorithm!r}")
    return restore_state(info)


def to_json(pcg):
    return json.dumps(to_dict(pcg))


def from_json(text):
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StateValidationError(f"Invalid JSON state: {exc}") from exc
    if not isinstance(data, dict):
        raise StateValidationError("JSON state must be an object")
    return from_dict(data)


def save_state(pcg, output_path):
    """
    Writes the generator state to a .pcg file.
    Structure:
    [MAGIC:4]
    [TAG_LEN:1]
    [TAG: TAG_LEN ascii bytes]
    [STATE + STREAM: seed layout, 2 * sizeof(Itype) bytes]
    """
    info = get_state(pcg)
    tag = info.algorithm.encode('ascii')
    bits = type(pcg).itype_bits

    with open(output_path, 'wb') as f:
        f.write(MAGIC_HEADER)
        f.write(len(tag).to_bytes(1, 'big'))
        f.write(tag)
        f.write(encode_seed(info.state, info.stream, bits))
    logger.debug("Saved %s state to %s", info.algorithm, output_path)


def load_state(input_path):
    with open(input_path, 'rb') as f:
        magic = f.read(4)
        if magic != MAGIC_HEADER:
            raise StateValidationError("Invalid File Format")

        tag_len = f.read(1)
        if len(tag_len) != 1:
            raise StateValidationError("Truncated state file")
        tag_bytes = f.read(tag_len[0])
        payload = f.read()

    try:
        algorithm = tag_bytes.decode('ascii')
    except UnicodeDecodeError as exc:
        raise StateValidationError("Algorithm tag is not ASCII") from exc

    cls = get_generator(algorithm)
    if len(payload) != seed_size(cls.itype_bits):
        raise StateValidationError(
            f"Expected {seed_size(cls.itype_bits)} state bytes for {algorithm}, "
            f"found {len(payload)}"
        )
    state, stream = decode_seed(payload, cls.itype_bits)
    logger.debug("Loaded %s state from %s", algorithm, input_path)
    return restore_state(PcgStateInfo(state=state, stream=stream, algorithm=algorithm))
