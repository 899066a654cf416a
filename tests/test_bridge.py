"""
Tests for the decoder host: channel maps, wait() conditions and output
routing.
"""

import pytest

from conftest import DEFAULT_MAP
from lpcdec import bridge
from lpcdec.decoders import lpc


class EdgeLogger(bridge.Decoder):
    id = 'edgelog'
    channels = (
        {'id': 'clk', 'name': 'CLK', 'desc': 'Clock'},
        {'id': 'data', 'name': 'DATA', 'desc': 'Data'},
    )

    def __init__(self, conds=None):
        self.conds = conds
        self.seen = []

    def start(self):
        self.out_python = self.register(bridge.OUTPUT_PYTHON)

    def decode(self):
        conds = self.conds if self.conds is not None else {0: 'e'}
        while True:
            pins = self.wait(conds)
            self.seen.append(self.samplenum)
            self.put(self.samplenum, self.samplenum, self.out_python, pins)


def levels(*clk):
    # One sample per level, clock on bit 0 and data on bit 1 (data = clk).
    return [(i, c | (c << 1)) for i, c in enumerate(clk)]


class TestChannelMap:
    """Tests for validation of the sample bit assignment."""

    def test_default_lpc_map(self):
        session = bridge.Session(lpc.Decoder(), DEFAULT_MAP)
        assert session.bits == [0, 1, 5, 4, 3, 2]

    def test_overlapping_bits(self):
        chmap = dict(DEFAULT_MAP, lad3=1)
        with pytest.raises(bridge.ChannelMapError, match='share bit 1'):
            bridge.Session(lpc.Decoder(), chmap)

    def test_bit_out_of_range(self):
        chmap = dict(DEFAULT_MAP, lclk=8)
        with pytest.raises(bridge.ChannelMapError, match='out of range'):
            bridge.Session(lpc.Decoder(), chmap)

    def test_missing_required_channel(self):
        chmap = dict(DEFAULT_MAP)
        del chmap['lframe']
        with pytest.raises(bridge.ChannelMapError, match='lframe'):
            bridge.Session(lpc.Decoder(), chmap)

    def test_unknown_channel(self):
        with pytest.raises(bridge.ChannelMapError, match='serirq'):
            bridge.Session(lpc.Decoder(), dict(DEFAULT_MAP, serirq=6))

    def test_pins_follow_channel_order(self):
        session = bridge.Session(EdgeLogger(), {'clk': 3, 'data': 0})
        assert session.pins(0b1000) == (1, 0)
        assert session.pins(0b0001) == (0, 1)


class TestWait:
    """Tests for wait() conditions."""

    def run(self, samples, **kw):
        dec = EdgeLogger(**kw)
        session = bridge.Session(dec, {'clk': 0, 'data': 1})
        session.run(samples)
        return dec

    def test_any_edge(self):
        dec = self.run(levels(0, 1, 1, 0, 1))
        assert dec.seen == [1, 3, 4]

    def test_first_sample_is_no_edge(self):
        dec = self.run(levels(1, 1, 0))
        assert dec.seen == [2]

    def test_edge_on_selected_pin_only(self):
        dec = self.run([(0, 0b00), (1, 0b01), (2, 0b11), (3, 0b10)], conds={1: 'e'})
        assert dec.seen == [2]

    def test_all_terms_of_a_condition(self):
        dec = self.run([(0, 0b00), (1, 0b01), (2, 0b10), (3, 0b01)],
                       conds={0: 'e', 1: 'e'})
        assert dec.seen == [2, 3]

    def test_any_of_several_conditions(self):
        dec = self.run([(0, 0b00), (1, 0b01), (2, 0b11), (3, 0b11)],
                       conds=[{0: 'e'}, {1: 'e'}])
        assert dec.seen == [1, 2]

    def test_matched_flags(self):
        dec = self.run([(0, 0b00), (1, 0b10)], conds=[{0: 'e'}, {1: 'e'}])
        assert dec.seen == [1]
        assert dec.matched == (False, True)

    def test_no_conditions_returns_every_sample(self):
        dec = self.run([(5, 0), (6, 0), (9, 0)], conds=[])
        assert dec.seen == [5, 6, 9]

    def test_unsupported_condition(self):
        with pytest.raises(ValueError, match='Unsupported condition'):
            self.run(levels(0, 1), conds={0: 'r'})

    def test_end_of_input_stops_decode(self):
        dec = self.run([])
        assert dec.seen == []

    def test_wait_raises_at_end_of_input(self):
        dec = EdgeLogger()
        session = bridge.Session(dec, {'clk': 0, 'data': 1})
        session.samples = iter(levels(0))
        assert dec.wait() == (0, 0)
        with pytest.raises(EOFError):
            dec.wait()


class TestOutput:
    def test_put_reaches_callbacks(self):
        dec = EdgeLogger()
        session = bridge.Session(dec, {'clk': 0, 'data': 1})
        got = []
        session.add_callback(bridge.OUTPUT_PYTHON, lambda ss, es, data: got.append((ss, data)))
        session.add_callback(bridge.OUTPUT_ANN, lambda ss, es, data: got.append('ann'))
        session.run(levels(1, 0, 1, 0))
        assert got == [(1, (0, 0)), (2, (1, 1)), (3, (0, 0))]

    def test_register_ids(self):
        session = bridge.Session(EdgeLogger(), {'clk': 0, 'data': 1})
        assert session.register(bridge.OUTPUT_ANN) == 0
        assert session.register(bridge.OUTPUT_PYTHON) == 1
