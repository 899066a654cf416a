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

# START field values (LAD[3:0] while LFRAME# is asserted).
START_TARGET = 0b0000
START_ABORT = 0b1111

# SYNC field values.
SYNC_READY = 0b0000
SYNC_ERROR = 0b1010

# Cycles visited by the longest target cycle, plus the LFRAME# wait entry.
MAX_PHASES = 9

fields = {
    # START field (indicates start or stop of a transaction)
    'START': {
        0b0000: 'Start of cycle for a target',
        0b0001: 'Reserved',
        0b0010: 'Grant for bus master 0',
        0b0011: 'Grant for bus master 1',
        0b0100: 'Reserved',
        0b0101: 'Reserved',
        0b0110: 'Reserved',
        0b0111: 'Reserved',
        0b1000: 'Reserved',
        0b1001: 'Reserved',
        0b1010: 'Reserved',
        0b1011: 'Reserved',
        0b1100: 'Reserved',
        0b1101: 'Start of cycle for a Firmware Memory Read cycle',
        0b1110: 'Start of cycle for a Firmware Memory Write cycle',
        0b1111: 'Stop/abort (end of a cycle for a target)',
    },
    # Cycle type / direction field
    # Bit 0 (LAD[0]) is unused, should always be 0.
    # Neither host nor peripheral are allowed to drive 0b11x0.
    'CT_DR': {
        0b0000: 'I/O read',
        0b0001: 'I/O read',
        0b0010: 'I/O write',
        0b0011: 'I/O write',
        0b0100: 'Memory read',
        0b0101: 'Memory read',
        0b0110: 'Memory write',
        0b0111: 'Memory write',
        0b1000: 'DMA read',
        0b1001: 'DMA read',
        0b1010: 'DMA write',
        0b1011: 'DMA write',
        0b1100: 'Reserved / not allowed',
        0b1101: 'Reserved / not allowed',
        0b1110: 'Reserved / not allowed',
        0b1111: 'Reserved / not allowed',
    },
    # SYNC field (used to add wait states)
    'SYNC': {
        0b0000: 'Ready',
        0b0001: 'Reserved',
        0b0010: 'Reserved',
        0b0011: 'Reserved',
        0b0100: 'Reserved',
        0b0101: 'Short wait',
        0b0110: 'Long wait',
        0b0111: 'Reserved',
        0b1000: 'Reserved',
        0b1001: 'Ready more (DMA only)',
        0b1010: 'Error',
        0b1011: 'Reserved',
        0b1100: 'Reserved',
        0b1101: 'Reserved',
        0b1110: 'Reserved',
        0b1111: 'Reserved',
    },
}

# Short names for the cycle type, indexed by LAD[3:2] of the CT/DR field.
cycle_types = ('I/O', 'Mem', 'DMA', 'RESERVED')

# Names of the decoder phases, indexed by St.
phase_names = ('WAIT_LFRAME_ASSERTED', 'START', 'ADDR', 'DATA', 'TAR', 'SYNC')
