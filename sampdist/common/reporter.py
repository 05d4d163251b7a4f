''' Decorator giving a results class a `report` property plus Markdown and HTML
    representations for notebooks.

    Usage:

        @reporter.reporter(ReportStatistics)
        @dataclass
        class StatisticsResult:
            ...
'''


def reporter(reportclass):
    ''' Attach reportclass to the decorated results class '''
    def decorator(resultclass):

        @property
        def report(self):
            return reportclass(self)

        def _repr_markdown_(self):
            return self.report.summary().get_md()

        def _repr_html_(self):
            return self.report.summary().get_html()

        resultclass.report = report
        resultclass._repr_markdown_ = _repr_markdown_
        resultclass._repr_html_ = _repr_html_
        return resultclass
    return decorator
