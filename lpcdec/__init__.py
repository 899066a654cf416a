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
lpc-dec - Low Pin Count bus decoder for logic analyzer captures.
'''

__version__ = '1.0.0'
