''' Report summary statistics of a histogram or sample '''

from ...common import report


LABELS = [('numobservations', 'N'),
          ('mean', 'Mean'),
          ('median', 'Median'),
          ('std', 'Standard Deviation'),
          ('variance', 'Variance'),
          ('variance_unbiased', 'Variance (unbiased)'),
          ('mad', 'Mean Absolute Deviation'),
          ('range', 'Range'),
          ('skew', 'Skew'),
          ('kurtosis', 'Kurtosis')]


def statistics_rows(result, **kwargs):
    ''' Table rows of (label, value) for every available statistic '''
    rows = []
    for attr, label in LABELS:
        value = getattr(result, attr)
        if value is None:
            continue
        if attr == 'numobservations':
            rows.append([label, f'{value:.0f}'])
        else:
            rows.append([label, report.Number(value, **kwargs)])
    return rows


class ReportStatistics:
    ''' Report of summary statistics

        Args:
            result: StatisticsResult instance
    '''
    def __init__(self, result):
        self._result = result

    def _repr_markdown_(self):
        return self.summary().get_md()

    def summary(self, **kwargs):
        ''' Table of summary statistics '''
        rpt = report.Report(**kwargs)
        rpt.table(statistics_rows(self._result, fmin=2), hdr=['Statistic', 'Value'])
        return rpt
