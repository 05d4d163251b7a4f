''' Sampling distribution project component '''

import logging

from .component import ProjectComponent
from ..histogram import EmpiricalDistribution
from ..sampling import SamplingSession


class ProjectSampling(ProjectComponent):
    ''' Sampling distribution project component

        Args:
            session (SamplingSession): Session to calculate with. A new
                session is created from the shape/seed settings if None.
            name (str): Name of the calculation
    '''
    def __init__(self, session=None, name='sampling'):
        super().__init__(name=name)
        self.shape = 'normal'
        self.para = 1
        self.stat = 'mean'
        self.samplesize = 5
        self.numsamples = 1000
        self.seed = None
        self.continuous = None   # None uses the shape's default
        self.parent = None       # Parent histogram for custom shape
        self.session = session

    def _make_session(self):
        session = SamplingSession(shape=self.shape if self.parent is None else 'custom',
                                  para=self.para, seed=self.seed)
        if self.parent is not None:
            session.set_parent(self.parent, continuous=bool(self.continuous))
        elif self.continuous is not None:
            session.continuous = self.continuous
        return session

    def calculate(self):
        ''' Run the sampling calculation

            Returns:
                SamplingResults
        '''
        if self.session is None:
            self.session = self._make_session()
        logging.info('Sampling %s %s times with sample size %s', self.session.shapename,
                     self.numsamples, self.samplesize)
        self.session.accumulate(self.stat, self.samplesize, self.numsamples)
        self._result = self.session.results(self.stat, self.samplesize)
        return self._result

    def get_config(self):
        ''' Get configuration dictionary '''
        d = {}
        d['mode'] = 'sampling'
        d['name'] = self.name
        d['desc'] = self.description
        d['shape'] = self.shape
        d['para'] = self.para
        d['stat'] = self.stat
        d['samplesize'] = self.samplesize
        d['numsamples'] = self.numsamples
        d['seed'] = self.seed
        if self.continuous is not None:
            d['continuous'] = self.continuous
        if self.parent is not None:
            d['parent'] = self.parent.get_config()
        return d

    def load_config(self, config):
        ''' Load config into this project '''
        mode = config.get('mode', 'sampling')
        if mode != 'sampling':
            raise ValueError(f'Cannot load {mode} configuration into a sampling project')
        self.name = config.get('name', 'sampling')
        self.description = config.get('desc', '')
        self.shape = config.get('shape', 'normal')
        self.para = int(config.get('para', 1))
        self.stat = config.get('stat', 'mean')
        self.samplesize = int(config.get('samplesize', 5))
        self.numsamples = int(config.get('numsamples', 1000))
        self.seed = config.get('seed', None)
        self.continuous = config.get('continuous', None)
        parent = config.get('parent', None)
        self.parent = EmpiricalDistribution.from_config(parent) if parent is not None else None
        self.session = None
        self._result = None
