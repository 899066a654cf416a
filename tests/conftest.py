"""
Shared helpers for the lpc-dec tests.

LpcTrace synthesizes the samples of an LPC waveform: every LCLK period is
two samples, clock high then clock low, with LFRAME# and LAD[3:0] held for
the whole period so the falling edge sees them.
"""

import struct

import pytest

from lpcdec import bridge
from lpcdec.decoders import lpc
from lpcdec.decoders.lpc.pd import Ann, CycleType

DEFAULT_MAP = {'lclk': 0, 'lframe': 1, 'lad0': 5, 'lad1': 4, 'lad2': 3, 'lad3': 2}


class LpcTrace:
    """Builds the (seqno, sample) pairs of an LPC bus capture."""

    def __init__(self, chmap=None):
        self.chmap = chmap or DEFAULT_MAP
        self.samples = []
        self.seqno = 0

    def encode(self, lclk, lframe, lad):
        levels = {'lclk': lclk, 'lframe': lframe}
        levels.update(('lad%d' % i, (lad >> i) & 1) for i in range(4))
        return sum(levels[cid] << bit for cid, bit in self.chmap.items())

    def sample(self, value):
        self.samples.append((self.seqno, value))
        self.seqno += 1
        return self

    def clock(self, lad=0xf, lframe=1):
        self.sample(self.encode(1, lframe, lad))
        self.sample(self.encode(0, lframe, lad))
        return self

    def idle(self, n=1):
        for _ in range(n):
            self.clock()
        return self

    def start(self, start=0b0000):
        return self.clock(start, lframe=0)

    def ct_dr(self, cycle_type, write):
        return self.clock((cycle_type << 2) | (0b10 if write else 0))

    def addr(self, addr, nibbles):
        for i in reversed(range(nibbles)):
            self.clock((addr >> (i * 4)) & 0xf)
        return self

    def data(self, byte):
        return self.clock(byte & 0xf).clock(byte >> 4)

    def tar(self, lad=0xf):
        return self.clock(lad).clock(lad)

    def sync(self, waits=0, wait_code=0b0110):
        for _ in range(waits):
            self.clock(wait_code)
        return self.clock(0b0000)

    def write_cycle(self, cycle_type, addr, data, waits=0):
        nibbles = 4 if cycle_type == CycleType.IO else 8
        self.start().ct_dr(cycle_type, True).addr(addr, nibbles).data(data)
        return self.tar().sync(waits).tar()

    def read_cycle(self, cycle_type, addr, data, waits=0):
        nibbles = 4 if cycle_type == CycleType.IO else 8
        self.start().ct_dr(cycle_type, False).addr(addr, nibbles).tar()
        return self.sync(waits).data(data).tar()

    def capture(self):
        return b''.join(struct.pack('<QB', seqno, value) for seqno, value in self.samples)


class Decoded:
    """An LPC decoder bound to a session, collecting what it puts out."""

    def __init__(self, chmap=None):
        self.decoder = lpc.Decoder()
        self.session = bridge.Session(self.decoder, chmap or DEFAULT_MAP)
        self.cycles = []
        self.warnings = []
        self.annotations = []
        self.session.add_callback(bridge.OUTPUT_PYTHON, self.on_python)
        self.session.add_callback(bridge.OUTPUT_ANN, self.on_ann)

    def on_python(self, ss, es, data):
        ptype, cycle = data
        assert ptype == 'CYCLE'
        self.cycles.append(cycle)

    def on_ann(self, ss, es, data):
        cls, txts = data
        self.annotations.append((ss, es, cls, txts))
        if cls == Ann.WARNING:
            self.warnings.append(txts[0])

    def run(self, samples):
        self.session.run(samples)
        return self

    def begin(self):
        self.decoder.start()
        return self

    def feed(self, samples):
        """Push samples one at a time, without running decode() to the end."""
        self.session.samples = iter(samples)
        while True:
            try:
                pins = self.decoder.wait()
            except EOFError:
                break
            self.decoder.handle_sample(pins)
        return self


def decode(samples, chmap=None):
    return Decoded(chmap).run(samples)


@pytest.fixture
def trace():
    return LpcTrace()
