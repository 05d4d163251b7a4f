''' Report sampling distribution results '''

from ...common import report
from ...histogram.report.histogram import LABELS


class ReportSampling:
    ''' Report for a sampling distribution calculation

        Args:
            results: SamplingResults instance
    '''
    def __init__(self, results):
        self._results = results

    def _repr_markdown_(self):
        return self.summary().get_md()

    def summary(self, **kwargs):
        ''' Compare statistics of the parent and the sampling distribution '''
        parent = self._results.parent_statistics
        sampling = self._results.sampling_statistics
        rows = []
        for attr, label in LABELS:
            pval, sval = getattr(parent, attr), getattr(sampling, attr)
            if pval is None or sval is None:
                continue
            if attr == 'numobservations':
                rows.append([label, f'{pval:.0f}', f'{sval:.0f}'])
            else:
                rows.append([label, report.Number(pval, fmin=2), report.Number(sval, fmin=2)])

        stderr = self._results.standard_error()
        if stderr is not None:
            rows.append(['Expected SD of mean', '-', report.Number(stderr, fmin=2)])

        rpt = report.Report(**kwargs)
        rpt.hdr(f'Sampling distribution of {self._results.stat} (N = {self._results.samplesize})', level=2)
        rpt.txt(f'Parent population: {self._results.shape} ({self._results.label})\n\n')
        rpt.table(rows, hdr=['Statistic', 'Parent', 'Sampling Distribution'])
        return rpt

    def samples(self, **kwargs):
        ''' Statistics of the raw values drawn from the parent '''
        rpt = report.Report(**kwargs)
        rpt.hdr('Sampled values', level=3)
        rpt.append(self._results.samplelog_statistics.report.summary(**kwargs))
        return rpt

    def histogram(self, **kwargs):
        ''' Table of the sampling distribution frequencies and its normal fit '''
        dist = self._results.samplingdist
        fit = dist.normal_fit()
        hdr = ['Value', 'Frequency'] if fit is None else ['Value', 'Frequency', 'Normal Fit']
        values = report.Number.number_array(dist.values)
        rows = []
        for i, value in enumerate(values):
            row = [value, f'{dist.frequencies[i]:g}']
            if fit is not None:
                row.append(report.Number(fit[i], fmin=1))
            rows.append(row)
        rpt = report.Report(**kwargs)
        rpt.hdr('Histogram', level=3)
        rpt.table(rows, hdr=hdr)
        return rpt

    def all(self, **kwargs):
        ''' Full report: summary, sampled values, and histogram '''
        rpt = self.summary(**kwargs)
        rpt.append(self.samples(**kwargs))
        rpt.append(self.histogram(**kwargs))
        return rpt
