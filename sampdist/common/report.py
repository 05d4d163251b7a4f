''' Markdown report formatting and rendering '''

from collections import ChainMap
import numpy as np
import markdown

from .style import css


# Defaults if kwargs aren't provided
default_sigfigs = 2
default_numformat = 'auto'
default_thresh = 5
default_E = True


class Number:
    ''' A formatted numeric value for use in a report

        Args:
            value (float): The value to report
            n (int): Number of significant figures
            fmt (string): Format for the number - auto, decimal, scientific
            fmin (int): Minimum number of decimal places, as override to n to
                prevent rounding too much.
            thresh (int): Exponent threshold for converting to scientific notation when in
                "auto" format. Numbers above 10**thresh will be printed in scientific
                notation.
            elower (bool): Dispaly scientific notation with lowercase "e"
            suffix (string): Text to print after the number, such as " %"
    '''
    numfmts = ['auto', 'decimal', 'scientific', 'sci']

    def __init__(self, value, **kwargs):
        self.value = value
        self.kwargs = kwargs

    def __str__(self):
        return self.string()

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.string()

    def __len__(self):
        return len(self.string())

    def string(self, **kwargs):
        ''' Get string representation of the number.

            Args:
                See Number arguments. Anything defined in
                Number __init__ kwargs override the string() kwargs
        '''
        kargs = ChainMap(self.kwargs, kwargs)
        figs = kargs.get('n', default_sigfigs)
        fmin = kargs.get('fmin', None)
        fmt = kargs.get('fmt', default_numformat).lower()
        thresh = kargs.get('thresh', default_thresh)
        elower = kargs.get('elower', default_E)
        suffix = kargs.get('suffix', '')
        echr = 'e' if elower else 'E'

        if fmt not in self.numfmts:
            raise ValueError(f'Number Format must be one of {", ".join(self.numfmts)}')

        if figs < 1:
            raise ValueError('Significant Figures must be >= 1')

        value = self.value
        if value is None:
            numstr = 'nan'

        elif not np.isfinite(value):
            numstr = format(float(value))  # Will format into 'nan' or 'inf'

        elif value == 0:
            decimals = max(figs-1, fmin or 0)
            numstr = '0' if decimals == 0 else '0.' + '0'*decimals
            if fmt in ['sci', 'scientific']:
                numstr = numstr + 'e+00'

        else:
            if fmt == 'auto':
                if abs(value) > 10**thresh or abs(value) < 10**-thresh:
                    fmt = 'sci'
                else:
                    fmt = 'decimal'

            exp = int(np.floor(np.log10(abs(value))))   # Exponent if written in exp. notation.
            roundto = -(exp - (figs-1))
            if fmin is not None:
                roundto = max(fmin, roundto)
                figs = roundto + exp + 1

            if fmt == 'decimal':
                numstr = f'{np.round(value, roundto):.{max(0, roundto)}f}'
            else:
                numstr = f'{value:.{max(figs-1, 0)}{echr}}'

        return numstr + suffix

    @classmethod
    def number_array(cls, arr, **kwargs):
        ''' Return a list of Number objects with enough precision that they will
            print uniquely.

            Args:
                arr (array or list): Array of numeric values
                **kwargs: passed to Number class

            Returns:
                List of Number instances
        '''
        kwfmin = kwargs.pop('fmin', 0)
        xdiff = abs(np.diff(sorted(np.asarray(arr, dtype=float))))
        try:
            diffmin = xdiff[np.nonzero(xdiff)].min()
        except ValueError:
            fmin = kwfmin   # All numbers are the same. Just use default sigfigs.
        else:
            try:
                fmin = max(kwfmin, -int((np.floor(np.log10(diffmin)))))
            except (OverflowError, ValueError):
                fmin = kwfmin
        return [cls(x, fmin=fmin, **kwargs) for x in arr]


class Report:
    ''' A Report consisting of text, headers, tables and formatted values
        that can be rendered to Markdown or HTML.

        Args:
            n (int): Default significant figures for Numbers in the report
            fmt (string): Default Number format
    '''
    def __init__(self, **kwargs):
        self._s = ''
        self._values = []
        self.kwargs = kwargs

    def __str__(self):
        return self.get_md()

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.get_md()

    def hdr(self, text, level=1):
        ''' Add a header to the report

            Args:
                text (string): Text of the header
                level (int): Header level. 1 is top level (# HEADER) in markdown.
        '''
        self._s += f'{"#"*level} {text}\n\n'

    def txt(self, text):
        ''' Add text to the report '''
        self._s += text

    def newline(self):
        ''' Add a line break '''
        self._s += '\n\n'

    def num(self, value, end='', **kwargs):
        ''' Add a Numeric value to the report

            Args:
                value (float): Value to represent
                end (string): Characters to print after the value
                **kwargs: passed to Number class
        '''
        self._s += self._insert_obj(Number(value, **kwargs), end=end)

    def _insert_obj(self, obj, end=''):
        ''' Tag a Number for later formatting, or convert text, and return the string for _s '''
        if not isinstance(obj, Number):
            return f'{obj}{end}'
        tag = f'[[VAL{len(self._values)}]]'
        self._values.append(obj)
        return tag + end

    def table(self, rows, hdr):
        ''' Add a table to the report

            Args:
                rows (list): List of lists for each row. Each cell is a
                    string or a Number.
                hdr (list): Column headings, or None for a blank header row.
        '''
        s = '\n'
        if hdr is None:
            hdr = ['-'] * len(rows[0])  # PyMarkdown must have a header row, with non-empty strings

        widths = np.array([len(str(h))+1 for h in hdr], dtype=int)
        for row in rows:
            widths = np.maximum(widths, np.array([len(c) if hasattr(c, '__len__') else 1 for c in row]))
        widths = widths + 1
        widths = np.maximum(widths, 9)

        line = [self._insert_obj(col) for col in hdr]
        s += ' | '.join(f'{val:{w}}' for w, val in zip(widths, line)) + '\n'
        s += '|'.join(f'{w*"-"}' for w in widths) + '\n'
        for row in rows:
            line = [self._insert_obj(col) for col in row]
            s += ' | '.join(f'{val:{w}}' for w, val in zip(widths, line)) + '\n'

        # Add | at beginning and end
        lines = ''
        for line in s.splitlines():
            lines += (('|' + line + '|\n') if len(line) > 0 else '\n')
        self._s += lines + '\n\n'

    def append(self, report, end=''):
        ''' Append another report onto this one

            Args:
                report: Another Report instance
                end (str): String to append after the report
        '''
        appendstring = report._s
        # Go backwards through the tagged values to renumber them
        for i in range(len(report._values)-1, -1, -1):
            appendstring = appendstring.replace(f'[[VAL{i}]]', f'[[VAL{i+len(self._values)}]]')
        self._values.extend(report._values)
        self._s += appendstring
        self._s += end

    def get_md(self, **kwargs):
        ''' Get the report in markdown format.

            Args:
                **kwargs: See Number class. Arguments specified at Report
                instantiation override arguments given here.
        '''
        kargs = ChainMap(self.kwargs, kwargs)
        s = self._s
        for idx, val in enumerate(self._values):
            s = s.replace(f'[[VAL{idx}]]', val.string(**kargs), 1)
        return s.strip()

    def get_html(self, **kwargs):
        ''' Get report in HTML format, including CSS header.

            Args:
                **kwargs: See Report class. Arguments specified at Report
                instantiation override arguments given here.
        '''
        CSS = '<style type="text/css">' + css.css + '</style>'
        html = markdown.markdown(self.get_md(**kwargs), extensions=['markdown.extensions.tables'])
        html = html.encode('ascii', 'xmlcharrefreplace').decode('utf-8')
        html = html.replace('<table>', '<table border="0.5" cellpadding="0" cellspacing="0">')
        return CSS + '\n' + html

