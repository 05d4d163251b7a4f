#!/usr/bin/env python
''' Sampling Distribution Explorer
    Command line interface.

    Multiple commands are installed:
        sampdist: Build the sampling distribution of a statistic from a named shape
        sampdistf: Run a sampling calculation from config (yaml) file
'''
import os
import sys
import argparse

from sampdist.common import statfuncs
from sampdist.project import ProjectSampling
from sampdist.sampling import shapes


def _write_report(result, args):
    ''' Write the result report to args.o in the format requested by args '''
    fmt = args.f
    if args.o and hasattr(args.o, 'name') and args.o.name != '<stdout>':
        _, fmt = os.path.splitext(str(args.o.name))
        fmt = fmt[1:]  # remove '.'

    if args.verbose > 0:
        r = result.report.all()
    else:
        r = result.report.summary()

    if fmt == 'html':
        strreport = r.get_html()
    else:
        strreport = r.get_md()
    args.o.write(strreport)


def main_setup(args=None):
    ''' Run sampling calculation defined in YAML setup file '''
    parser = argparse.ArgumentParser(prog='sampdistf', description='Run sampling calculation from setup file.')
    parser.add_argument('filename', help='Setup parameter file.', type=str)
    parser.add_argument('-o', help='Output filename. Extension determines file format.',
                        type=argparse.FileType('w', encoding='UTF-8'), default='-')
    parser.add_argument('-f', help="Output format for when output filename not provided ['txt', 'html', 'md']",
                        type=str, choices=['html', 'txt', 'md'])
    parser.add_argument('--verbose', '-v', help='Verbose mode. Include sampled values and histogram table.',
                        default=0, action='count')
    args = parser.parse_args(args=args)

    proj = ProjectSampling.from_configfile(args.filename)
    if proj is None:
        sys.exit(f'Could not load setup file {args.filename}')
    result = proj.calculate()
    _write_report(result, args)


def main_sample(args=None):
    ''' Build the sampling distribution of a statistic '''
    parser = argparse.ArgumentParser(prog='sampdist', description='Compute the sampling distribution of a statistic.')
    parser.add_argument('--shape', help='Parent population shape', type=str, default='normal',
                        choices=[s for s in shapes.SHAPES if s != 'custom'])
    parser.add_argument('--para', help='Parameter set of the shape (1, 2, or 3)', type=int, default=1)
    parser.add_argument('--stat', help='Statistic computed on each sample', type=str, default='mean',
                        choices=statfuncs.statistic_names())
    parser.add_argument('--samplesize', help='Number of values in each sample', type=int, default=5)
    parser.add_argument('--samples', help='Number of samples to draw', type=int, default=1000)
    parser.add_argument('--seed', help='Random Generator Seed', type=int, default=None)
    parser.add_argument('--continuous', help='Jitter sampled values within their bins',
                        dest='continuous', action='store_true', default=None)
    parser.add_argument('--discrete', help='Sample bin values exactly',
                        dest='continuous', action='store_false')
    parser.add_argument('-o', help='Output filename. Extension determines file format.',
                        type=argparse.FileType('w', encoding='UTF-8'), default='-')
    parser.add_argument('-f', help="Output format for when output filename not provided ['txt', 'html', 'md']",
                        type=str, choices=['html', 'txt', 'md'])
    parser.add_argument('--verbose', '-v', help='Verbose mode. Include sampled values and histogram table.',
                        default=0, action='count')
    args = parser.parse_args(args=args)

    proj = ProjectSampling()
    proj.shape = args.shape
    proj.para = args.para
    proj.stat = args.stat
    proj.samplesize = args.samplesize
    proj.numsamples = args.samples
    proj.seed = args.seed
    proj.continuous = args.continuous
    result = proj.calculate()
    _write_report(result, args)


if __name__ == '__main__':
    main_sample()
