"""Tests for the Packet model and field text helpers."""

import dataclasses

import pytest

from protocol.constants import EPOCH_OFFSET
from protocol.messages import Packet
from protocol.modes import (
    LeapIndicator,
    Mode,
    leap_to_text,
    mode_to_text,
    ref_id_to_text,
    stratum_to_text,
)
from protocol.timestamps import CalendarTime, NtpTimestamp


class TestPacket:
    """Packet construction and derived views."""

    def test_build_request_fields(self):
        request = Packet.build_request(instant=1700000000.9)

        assert request.leap == LeapIndicator.NO_WARNING
        assert request.version == 4
        assert request.mode == Mode.CLIENT
        assert request.stratum == 0
        assert request.poll == 0
        assert request.precision == -6
        assert request.root_delay == 0
        assert request.root_dispersion == 0
        assert request.ref_id == 0
        assert request.ref_timestamp == NtpTimestamp()
        assert request.orig_timestamp == NtpTimestamp()
        assert request.recv_timestamp == NtpTimestamp()
        assert request.tx_timestamp == NtpTimestamp(1700000000 + EPOCH_OFFSET, 0)

    def test_build_request_version(self):
        assert Packet.build_request(instant=0, version=3).version == 3

    def test_requests_are_independent(self):
        first = Packet.build_request(instant=100)
        second = Packet.build_request(instant=200)
        assert first.tx_timestamp != second.tx_timestamp

    def test_immutable(self):
        packet = Packet()
        with pytest.raises(dataclasses.FrozenInstanceError):
            packet.stratum = 1

    @pytest.mark.parametrize("field,value", [
        ('leap', 4),
        ('version', 8),
        ('mode', -1),
        ('stratum', 256),
        ('poll', 256),
        ('precision', 128),
        ('precision', -129),
        ('root_delay', 1 << 32),
        ('ref_id', -1),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValueError):
            Packet(**{field: value})

    def test_timestamp_words_validated(self):
        with pytest.raises(ValueError):
            NtpTimestamp(1 << 32, 0)

    def test_calendar_views(self):
        packet = Packet(
            ref_timestamp=NtpTimestamp(EPOCH_OFFSET, 0),
            tx_timestamp=NtpTimestamp(EPOCH_OFFSET + 1, 1 << 31),
        )
        assert packet.reference_time == CalendarTime(0, 0)
        assert packet.transmit_time == CalendarTime(1, 500000000)
        assert packet.originate_time == CalendarTime(-EPOCH_OFFSET, 0)

    def test_text_views(self):
        packet = Packet(leap=3, mode=4, stratum=2, ref_id=0xC0A80001)
        assert packet.leap_text == 'alarm condition (clock not synchronized)'
        assert packet.mode_text == 'server'
        assert packet.stratum_text == 'secondary reference'
        assert packet.ref_id_text == '192.168.0.1'


class TestFieldText:
    """Text helpers tolerate any wire value."""

    def test_leap_text(self):
        assert leap_to_text(0) == 'no warning'
        assert leap_to_text(9) == 'invalid (9)'

    def test_mode_text(self):
        assert mode_to_text(Mode.CLIENT) == 'client'
        assert mode_to_text(42) == 'invalid (42)'

    @pytest.mark.parametrize("stratum,text", [
        (0, 'unspecified or invalid'),
        (1, 'primary reference'),
        (2, 'secondary reference'),
        (15, 'secondary reference'),
        (16, 'unsynchronized'),
        (200, 'reserved'),
    ])
    def test_stratum_text(self, stratum, text):
        assert stratum_to_text(stratum) == text

    def test_ref_id_kiss_code(self):
        # Stratum 0 carries a kiss code such as RATE
        assert ref_id_to_text(0x52415445, 0) == 'RATE'

    def test_ref_id_reference_source(self):
        assert ref_id_to_text(0x47505300, 1) == 'GPS'

    def test_ref_id_address(self):
        assert ref_id_to_text(0x0A000001, 3) == '10.0.0.1'
