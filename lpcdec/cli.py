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

import argparse
import sys

from . import bridge
from .capture import CaptureError, CaptureReader
from .decoders import lpc
from .decoders.lpc.pd import Ann
from .output import format_cycle, format_warning

# Default sample bits of the LPC signals.
DEFAULT_LCLK = 0
DEFAULT_LFRAME = 1
DEFAULT_LAD = (5, 4, 3, 2)

def channel_map(lclk, lframe, lad):
    chmap = {'lclk': lclk, 'lframe': lframe}
    chmap.update(('lad%d' % i, bit) for i, bit in enumerate(lad))
    return chmap

def decode_capture(reader, session, verbose=False, out=None, err=None):
    '''Run session over all samples of reader, printing as it goes.'''
    out = out or sys.stdout
    err = err or sys.stderr

    def on_cycle(ss, es, data):
        ptype, cycle = data
        if ptype == 'CYCLE':
            print(format_cycle(cycle, verbose), file=out)

    def on_ann(ss, es, data):
        cls, txts = data
        if cls == Ann.WARNING:
            print(format_warning(ss, txts[0]), file=err)

    session.add_callback(bridge.OUTPUT_PYTHON, on_cycle)
    session.add_callback(bridge.OUTPUT_ANN, on_ann)
    session.run(reader.samples())

def main(argv=None):
    parser = argparse.ArgumentParser(prog='lpc-dec',
                                     description='Low Pin Count Bus protocol decoder')
    parser.add_argument('--input', '-i', metavar='PATH',
                        help='path/to/saleae/capture')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Dumps more information for each cycle like the '
                             'state transitions encountered')
    parser.add_argument('--lclk', type=int, default=DEFAULT_LCLK, metavar='BIT',
                        help='Sample bit of LCLK (default: %(default)s)')
    parser.add_argument('--lframe', type=int, default=DEFAULT_LFRAME, metavar='BIT',
                        help='Sample bit of LFRAME# (default: %(default)s)')
    parser.add_argument('--lad', type=int, nargs=4, default=list(DEFAULT_LAD),
                        metavar='BIT',
                        help='Sample bits of LAD[0] to LAD[3] (default: 5 4 3 2)')
    args = parser.parse_args(argv)

    if not args.input:
        print('A filepath to the capture is required!', file=sys.stderr)
        return 1

    chmap = channel_map(args.lclk, args.lframe, args.lad)
    try:
        session = bridge.Session(lpc.Decoder(), chmap)
    except bridge.ChannelMapError as e:
        print('Invalid channel assignment: %s' % e, file=sys.stderr)
        return 1

    try:
        reader = CaptureReader.open(args.input)
    except CaptureError as e:
        print(e, file=sys.stderr)
        return 1

    with reader:
        decode_capture(reader, session, args.verbose)

    if reader.has_error():
        print("Reading '%s' failed" % args.input, file=sys.stderr)
        return 1
    if reader.truncated:
        print("The file '%s' ends with a partial record (%d bytes), ignored" %
              (args.input, reader.truncated), file=sys.stderr)
    return 0

if __name__ == '__main__':
    sys.exit(main())
