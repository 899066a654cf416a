##
## This file is part of the lpc-dec project.
##
## Copyright (C) 2012-2013 Uwe Hermann <uwe@hermann-uwe.de>
## Copyright (C) 2020 Alexander Eichner <alexander.eichner@campus.tu-berlin.de>
##
## Based on the libsigrokdecode LPC decoder, which is distributed under the
## GNU General Public License, version 2 or (at your option) any later
## version. This file is distributed under version 3 of that License.
##
## This program is free software: you can redistribute it and/or modify
## it under the terms of the GNU General Public License as published by
## the Free Software Foundation, version 3.
##
## This program is distributed in the hope that it will be useful,
## but WITHOUT ANY WARRANTY; without even the implied warranty of
## MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
## GNU General Public License for more details.
##
## You should have received a copy of the GNU General Public License
## along with this program; if not, see <http://www.gnu.org/licenses/>.
##

from collections import namedtuple
from ... import bridge as srd
from ..common.srdhelper import bitpack, SrdIntEnum
from .lists import *

'''
OUTPUT_PYTHON format:

Packet:
['CYCLE', <cycle>]

<cycle> is a Cycle() namedtuple with the fields:
 - seqno: Sequence number of the sample carrying the START field.
 - cycle_type: CycleType of the cycle (IO or MEM).
 - write: True for write cycles, False for read cycles.
 - addr: The address, 16 bits for I/O and 32 bits for memory cycles.
 - data: The data byte (0 when the cycle was aborted before DATA).
 - phases: Tuple of St values the cycle went through.
 - abort: True when a new LFRAME# assertion cut the cycle short.

Examples:
 ['CYCLE', Cycle(seqno=4, cycle_type=CycleType.IO, write=True, addr=0x80,
                 data=0x5a, phases=(St.WAIT_LFRAME, St.START, St.ADDR,
                 St.DATA, St.TAR, St.SYNC, St.TAR), abort=False)]
'''

Pin = SrdIntEnum.from_str('Pin', 'LCLK LFRAME LAD0 LAD1 LAD2 LAD3')

Ann = SrdIntEnum.from_str('Ann', 'WARNING START CT_DR ADDR DATA TAR SYNC CYCLE')

St = SrdIntEnum.from_str('St', 'WAIT_LFRAME START ADDR DATA TAR SYNC')

CycleType = SrdIntEnum.from_str('CycleType', 'IO MEM DMA RSVD')

Cycle = namedtuple('Cycle', ['seqno', 'cycle_type', 'write', 'addr', 'data',
                             'phases', 'abort'])

class Decoder(srd.Decoder):
    api_version = 3
    id = 'lpc'
    name = 'LPC'
    longname = 'Low Pin Count'
    desc = 'Protocol for low-bandwidth devices on PC mainboards.'
    license = 'gplv3'
    inputs = ['logic']
    outputs = ['lpc']
    tags = ['PC']
    channels = (
        {'id': 'lclk',   'name': 'LCLK',    'desc': 'Clock'},
        {'id': 'lframe', 'name': 'LFRAME#', 'desc': 'Frame'},
        {'id': 'lad0',   'name': 'LAD[0]',  'desc': 'Addr/control/data 0'},
        {'id': 'lad1',   'name': 'LAD[1]',  'desc': 'Addr/control/data 1'},
        {'id': 'lad2',   'name': 'LAD[2]',  'desc': 'Addr/control/data 2'},
        {'id': 'lad3',   'name': 'LAD[3]',  'desc': 'Addr/control/data 3'},
    )
    annotations = (
        ('warning', 'Warning'),
        ('start', 'Start'),
        ('cycle-type', 'Cycle-type/direction'),
        ('addr', 'Address'),
        ('data', 'Data'),
        ('tar', 'Turn-around cycle'),
        ('sync', 'Sync'),
        ('cycle', 'Cycle'),
    )
    annotation_rows = (
        ('fields', 'Fields', Ann.prefixes('START CT_DR ADDR DATA TAR SYNC')),
        ('cycles', 'Cycles', (Ann.CYCLE,)),
        ('warnings', 'Warnings', (Ann.WARNING,)),
    )

    def __init__(self):
        self.reset()

    def reset(self):
        # We start with a low clock.
        self.oldlclk = 0
        self.start_field = START_TARGET
        self.ss_cycle = 0
        self.ss_block = self.es_block = 0
        self.reset_cycle()

    def reset_cycle(self):
        self.phases = [St.WAIT_LFRAME]
        self.cycle_type = CycleType.IO
        self.write = False
        self.addr = 0
        self.databyte = 0
        self.cur_nibble = 0
        self.addr_cycles = 0
        self.data_cycles = 0
        self.tar_cycles = 0

    def start(self):
        self.out_python = self.register(srd.OUTPUT_PYTHON)
        self.out_ann = self.register(srd.OUTPUT_ANN)

    @property
    def phase(self):
        return self.phases[-1]

    def putb(self, data):
        self.put(self.ss_block, self.es_block, self.out_ann, data)

    def putf(self, data):
        # Field annotations cover the clock period ending at this edge.
        self.es_block = self.samplenum
        self.putb(data)
        self.ss_block = self.samplenum

    def putw(self, txt):
        self.put(self.samplenum, self.samplenum, self.out_ann, [Ann.WARNING, [txt]])

    def push_phase(self, phase):
        if len(self.phases) >= MAX_PHASES:
            raise Exception('Phase history overflow: %s' %
                            ' -> '.join(phase_names[p] for p in self.phases))
        self.phases.append(phase)

    def emit_cycle(self, abort):
        cycle = Cycle(self.ss_cycle, self.cycle_type, self.write, self.addr,
                      self.databyte, tuple(self.phases), abort)
        self.put(self.ss_cycle, self.samplenum, self.out_python, ['CYCLE', cycle])

        s = '%s %s 0x%04x: 0x%02x' % (cycle_types[self.cycle_type],
            'write' if self.write else 'read', self.addr, self.databyte)
        if abort:
            s += ' (aborted)'
        self.put(self.ss_cycle, self.samplenum, self.out_ann, [Ann.CYCLE, [s]])

        self.reset_cycle()

    def advance(self):
        # Move on to the phase following the one which just completed.
        if self.phase == St.ADDR:
            if self.write:
                self.push_phase(St.DATA)
                self.data_cycles = 2
                self.cur_nibble = 0
            else:
                # Reads have a turn-around before the peripheral drives data.
                self.push_phase(St.TAR)
                self.tar_cycles = 2
        elif self.phase == St.DATA:
            self.push_phase(St.TAR)
            self.tar_cycles = 2
        elif self.phase == St.TAR:
            # The phase ahead of the TAR tells the first TAR from the last one.
            prev = self.phases[-2]
            if (self.write and prev == St.DATA) or \
                    (not self.write and prev == St.ADDR):
                self.push_phase(St.SYNC)
            else:
                self.emit_cycle(False)
        elif self.phase == St.SYNC:
            if self.write:
                self.push_phase(St.TAR)
                self.tar_cycles = 2
            else:
                self.push_phase(St.DATA)
                self.data_cycles = 2
                self.cur_nibble = 0

    def handle_lframe(self, lad):
        # LFRAME# asserted: START field, possibly aborting a running cycle.
        if self.phase not in (St.WAIT_LFRAME, St.START):
            self.putw('LFRAME# asserted during %s, cycle aborted' %
                      phase_names[self.phase])
            self.emit_cycle(True)

        self.start_field = lad
        self.ss_cycle = self.samplenum
        self.reset_cycle()
        self.push_phase(St.START)

        self.ss_block = self.samplenum
        self.putf([Ann.START, [fields['START'][lad], 'START', 'St', 'S']])

    def handle_start(self, lad):
        # LAD[3:0]: Cycle type / direction field (1 clock cycle).
        if self.start_field == START_TARGET:
            self.cycle_type = CycleType((lad & 0xc) >> 2)
            self.write = bool(lad & 0x2)
            self.addr = 0
            self.putf([Ann.CT_DR, ['Cycle type: %s' % fields['CT_DR'][lad],
                                   fields['CT_DR'][lad]]])

            if self.cycle_type == CycleType.IO:
                self.addr_cycles = 4 # Address is 16bits.
            elif self.cycle_type == CycleType.MEM:
                self.addr_cycles = 8 # Address is 32bits.
            else:
                self.putw('Encountered ILLEGAL/unsupported cycle type: %#x' %
                          self.cycle_type)
                self.reset_cycle()
                return

            self.push_phase(St.ADDR)
        elif self.start_field == START_ABORT:
            self.reset_cycle()

        # Bus master grants and reserved START values do not open a target
        # cycle, the decoder waits for the next LFRAME# assertion.

    def handle_addr(self, lad):
        # LAD[3:0]: ADDR field (4/8 clock cycles), driven MSN-first.
        self.addr_cycles -= 1
        self.addr |= lad << (self.addr_cycles * 4)
        if self.addr_cycles:
            return

        nibbles = 4 if self.cycle_type == CycleType.IO else 8
        s = 'Address: 0x%%0%dx' % nibbles
        self.putf([Ann.ADDR, [s % self.addr]])
        self.advance()

    def handle_data(self, lad):
        # LAD[3:0]: DATA field (2 clock cycles), driven LSN-first.
        self.databyte |= lad << (self.cur_nibble * 4)
        self.cur_nibble += 1
        if self.cur_nibble != self.data_cycles:
            return

        self.putf([Ann.DATA, ['DATA: 0x%02x' % self.databyte]])
        self.advance()

    def handle_tar(self, lad):
        # LAD[3:0]: TAR field (2 clock cycles).

        # On the first TAR clock cycle LAD[3:0] is driven to 1111 by
        # either the host or peripheral. On the second clock cycle,
        # the host or peripheral tri-states LAD[3:0], but its value
        # should still be 1111, due to pull-ups on the LAD lines.
        tarcount = 2 - self.tar_cycles
        lad_bits = '{:04b}'.format(lad)
        self.putf([Ann.TAR, ['TAR, cycle %d: %s' % (tarcount, lad_bits)]])
        if lad != 0b1111:
            self.putw('TAR, cycle %d: %s (expected 1111)' % (tarcount, lad_bits))

        self.tar_cycles -= 1
        if not self.tar_cycles:
            self.advance()

    def handle_sync(self, lad):
        # LAD[3:0]: SYNC field (1-n clock cycles).
        sync = fields['SYNC'][lad]
        self.putf([Ann.SYNC, ['SYNC: %s' % sync, sync]])
        if sync == 'Reserved' or lad == SYNC_ERROR:
            self.putw('SYNC: {:04b} ({})'.format(lad, sync.lower()))

        # Anything but 'Ready' keeps the peripheral in SYNC.
        if lad == SYNC_READY:
            self.advance()

    def handle_sample(self, pins):
        lclk = pins[Pin.LCLK]
        if lclk == self.oldlclk:
            return

        # LPC signals are sampled on the falling LCLK edge.
        if self.oldlclk and not lclk:
            lframe = pins[Pin.LFRAME]
            lad = bitpack(pins[Pin.LAD0:Pin.LAD3 + 1])

            if lframe == 0:
                self.handle_lframe(lad)
            elif self.phase == St.WAIT_LFRAME:
                # We are not in any target cycle currently.
                pass
            elif self.phase == St.START:
                self.handle_start(lad)
            elif self.phase == St.ADDR:
                self.handle_addr(lad)
            elif self.phase == St.DATA:
                self.handle_data(lad)
            elif self.phase == St.TAR:
                self.handle_tar(lad)
            elif self.phase == St.SYNC:
                self.handle_sync(lad)

        self.oldlclk = lclk

    def decode(self):
        try:
            # The first sample gives the initial clock level, the host
            # hands over every LCLK transition after that.
            pins = self.wait()
            while True:
                self.handle_sample(pins)
                pins = self.wait({Pin.LCLK: 'e'})
        finally:
            if self.phase not in (St.WAIT_LFRAME, St.START):
                self.putw('Capture ended during %s, cycle incomplete' %
                          phase_names[self.phase])
