##
## This file is part of the libsigrokdecode project.
##
## Copyright (C) 2012-2020 Uwe Hermann <uwe@hermann-uwe.de>
##
## This program is free software; you can redistribute it and/or modify
## it under the terms of the GNU General Public License as published by
## the Free Software Foundation; either version 2 of the License, or
## (at your option) any later version.
##
## This program is distributed in the hope that it will be useful,
## but WITHOUT ANY WARRANTY; without even the implied warranty of
## MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
## GNU General Public License for more details.
##
## You should have received a copy of the GNU General Public License
## along with this program; if not, see <http://www.gnu.org/licenses/>.
##

from enum import IntEnum, unique
from itertools import chain

__all__ = ['bitpack', 'SrdIntEnum']

def bitpack(bits):
    '''Conversion from LSB first bit sequence to integer.'''
    return sum([b << i for i, b in enumerate(bits)])

@unique
class SrdIntEnum(IntEnum):
    @classmethod
    def _prefix(cls, p):
        return tuple([a.value for a in cls if a.name.startswith(p)])

    @classmethod
    def prefixes(cls, prefix_list):
        if isinstance(prefix_list, str):
            prefix_list = prefix_list.split()
        return tuple(chain(*[cls._prefix(p) for p in prefix_list]))

    @classmethod
    def from_list(cls, name, l):
        # Python defaults to start=1, but we want start=0.
        return cls(name, [(l[i], i) for i in range(len(l))])

    @classmethod
    def from_str(cls, name, s):
        return cls.from_list(name, s.split())
