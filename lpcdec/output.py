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

from .decoders.lpc.lists import cycle_types, phase_names

def format_cycle(cycle, verbose=False):
    '''Render a decoded cycle as one line of text.

    With verbose set, the phases the cycle went through are appended as a
    chain; otherwise only aborted cycles get a marker.
    '''
    s = '%d: %s %s 0x%04x: 0x%02x ' % (cycle.seqno, cycle_types[cycle.cycle_type],
        'Write' if cycle.write else 'Read ', cycle.addr, cycle.data)
    if verbose:
        # Walk the encountered state machine chain.
        s += ' -> '.join(phase_names[p] for p in cycle.phases)
        if cycle.abort:
            s += ' -> <ABORT>'
    elif cycle.abort:
        s += '<ABORT>'
    return s

def format_warning(ss, txt):
    return '%d: Warning: %s' % (ss, txt)
