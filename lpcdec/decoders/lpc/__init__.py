##
## This file is part of the lpc-dec project.
##
## Copyright (C) 2020 Alexander Eichner <alexander.eichner@campus.tu-berlin.de>
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

'''
LPC (Low Pin Count) is a bus for low-bandwidth devices on PC mainboards,
such as a Super I/O chip, flash memory, or a TPM.

The decoder samples LFRAME# and LAD[3:0] on falling LCLK edges and follows
I/O and memory target cycles through their START, CT/DR, ADDR, DATA, TAR and
SYNC fields. Every completed cycle, and every cycle cut short by a new
LFRAME# assertion, is emitted as a 'CYCLE' packet on the Python output.

DMA and reserved cycle types are recognized but not decoded, bus master
grants are ignored.
'''

from .pd import Decoder, Cycle, CycleType, St
