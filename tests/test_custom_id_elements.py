import random
import re
import uuid

import pytest

from catalog.services.custom_id import IdElement
from catalog.services.custom_id.elements import (
    RenderContext,
    random_uuid,
    random_value,
    render,
    sequence_value,
)
from catalog.services.custom_id.errors import UnknownElementKind


class StubRng:
    """Deterministic stand-in returning the configured extreme of each draw."""

    def __init__(self, *, pick=0, data=b"", bits=0):
        self.pick = pick
        self.data = data
        self.bits = bits

    def randrange(self, stop):
        return stop - 1 if self.pick == "max" else self.pick

    def randbytes(self, n):
        return self.data[:n]

    def getrandbits(self, k):
        return self.bits


def _ctx(fixed_now, rng=None, ordinal=None):
    return RenderContext(rng=rng or random.Random(7), now=fixed_now, ordinal=ordinal)


def test_random_decimal_is_zero_padded_to_width():
    assert random_value("D6", StubRng(pick=42)) == "000042"
    assert random_value("D6", StubRng(pick=0)) == "000000"


def test_random_decimal_upper_bound_is_all_nines():
    assert random_value("D4", StubRng(pick="max")) == "9999"


def test_random_hex_takes_first_width_characters_uppercase():
    rng = StubRng(data=bytes.fromhex("0a1b2c3d4e5f6071"))

    assert random_value("X8", rng) == "0A1B2C3D"
    assert random_value("X3", rng) == "0A1"


@pytest.mark.parametrize("spec", [None, "", "Q5"])
def test_random_without_recognized_spec_renders_nothing(spec):
    assert random_value(spec, StubRng(pick=5)) == ""


def test_random_values_have_declared_shape(seeded_rng):
    for _ in range(50):
        assert re.fullmatch(r"\d{5}", random_value("D5", seeded_rng))
        assert re.fullmatch(r"[0-9A-F]{7}", random_value("X7", seeded_rng))


@pytest.mark.parametrize("ordinal,spec,expected", [
    (7, None, "7"),
    (7, "D", "7"),
    (7, "D3", "007"),
    (1234, "D3", "1234"),
    (7, "D12", "7"),
    (7, "X4", "7"),
    (7, "Dx", "7"),
])
def test_sequence_value_padding(ordinal, spec, expected):
    assert sequence_value(ordinal, spec) == expected


def test_random_uuid_is_version_4_and_reproducible():
    first = random_uuid(random.Random(99))
    second = random_uuid(random.Random(99))

    assert first == second
    assert first.version == 4
    assert uuid.UUID(str(first)) == first


def test_render_fixed_text_and_date(fixed_now):
    ctx = _ctx(fixed_now)

    assert render(IdElement.fixed_text("INV-"), ctx) == "INV-"
    assert render(IdElement.date_time("yyyyMMdd"), ctx) == "20240305"


def test_render_uuid_is_lowercase_hyphenated(fixed_now):
    value = render(IdElement.uuid(), _ctx(fixed_now, rng=StubRng(bits=(1 << 128) - 1)))

    assert value == "ffffffff-ffff-4fff-bfff-ffffffffffff"


def test_render_sequence_uses_resolved_ordinal(fixed_now):
    assert render(IdElement.sequence("D4"), _ctx(fixed_now, ordinal=12)) == "0012"


def test_render_sequence_without_ordinal_is_an_error(fixed_now):
    with pytest.raises(ValueError):
        render(IdElement.sequence(), _ctx(fixed_now))


def test_render_unknown_kind_raises(fixed_now):
    with pytest.raises(UnknownElementKind):
        render(IdElement("Barcode"), _ctx(fixed_now))
