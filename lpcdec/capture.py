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
Buffered reader for LPC captures.

A capture is a flat sequence of 9 byte records without header or footer:
the sample's sequence number as unsigned 64 bit little endian integer,
followed by one byte holding the logic levels of up to 8 channels.
'''

import struct
from collections import namedtuple

# Size of the working buffer.
BUF_SIZE = 64 * 1024

U64 = struct.Struct('<Q')

Sample = namedtuple('Sample', ['seqno', 'value'])

ReadResult = namedtuple('ReadResult', ['status', 'value'])

RECORD_SIZE = U64.size + 1

class Status:
    OK, EOS, ERROR = range(3)

class CaptureError(Exception):
    pass

class CaptureReader:
    '''Forward-only reader handing out the samples of a capture.

    Reads never raise: they return a ReadResult whose status tells a value
    apart from end of stream or an I/O error. Only failing to get at the
    first chunk of data is fatal and raises CaptureError.
    '''

    def __init__(self, fileobj, name=None, owned=False):
        self.file = fileobj
        self.name = name or getattr(fileobj, 'name', '<capture>')
        self.owned = owned
        self.buf = bytearray(BUF_SIZE)
        self.cb_data = 0
        self.off_buf = 0
        self.error = False
        self.eos = False
        self.truncated = 0

        # Read in the first chunk.
        try:
            self.cb_data = self.file.readinto(self.buf)
        except OSError as e:
            self.close()
            raise CaptureError("The file '%s' could not be read: %s" % (self.name, e))
        if not self.cb_data:
            self.close()
            raise CaptureError("The file '%s' is empty" % self.name)

    @classmethod
    def open(cls, filename):
        try:
            f = open(filename, 'rb')
        except OSError as e:
            raise CaptureError("The file '%s' could not be opened: %s" %
                               (filename, e.strerror or e))
        return cls(f, name=str(filename), owned=True)

    def close(self):
        if self.owned and not self.file.closed:
            self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def has_error(self):
        return self.error

    def has_eos(self):
        return self.eos

    def available(self):
        return self.cb_data - self.off_buf

    def ensure_data(self, cb):
        if self.available() >= cb:
            return True
        if self.error or self.eos:
            return False

        # Move all the remaining data to the front and fill up the free space.
        rem = self.available()
        self.buf[:rem] = self.buf[self.off_buf:self.cb_data]
        self.off_buf = 0
        self.cb_data = rem

        while self.cb_data < cb:
            try:
                cb_read = self.file.readinto(memoryview(self.buf)[self.cb_data:])
            except OSError:
                self.error = True
                return False
            if not cb_read:
                self.eos = True
                return False
            self.cb_data += cb_read

        return True

    def result(self):
        return ReadResult(Status.ERROR if self.error else Status.EOS, None)

    def read_u8(self):
        if self.error or not self.ensure_data(1):
            return self.result()
        value = self.buf[self.off_buf]
        self.off_buf += 1
        return ReadResult(Status.OK, value)

    def read_u64(self):
        if self.error or not self.ensure_data(U64.size):
            return self.result()
        value, = U64.unpack_from(self.buf, self.off_buf)
        self.off_buf += U64.size
        return ReadResult(Status.OK, value)

    def samples(self):
        '''Yield Sample() tuples until the end of the capture or an error.'''
        while True:
            # Never hand out a record the capture only holds part of.
            if not self.ensure_data(RECORD_SIZE):
                if not self.error:
                    self.truncated = self.available()
                return
            seqno = self.read_u64()
            value = self.read_u8()
            yield Sample(seqno.value, value.value)
