''' Project components, for saving and loading a calculation setup as yaml '''

import logging
import numpy as np
import yaml


# pyYaml can't serialize numpy types. Add custom representers.
def np64_representer(dumper: yaml.Dumper, data: np.float64):
    ''' Represent numpy float64 as yaml '''
    return dumper.represent_float(float(data))


def npi64_representer(dumper: yaml.Dumper, data: np.int64):
    ''' Represent numpy int64 as yaml '''
    return dumper.represent_int(int(data))


def ndarray_representer(dumper: yaml.Dumper, array: np.ndarray) -> yaml.Node:
    ''' Represent numpy ndarray as list in yaml '''
    return dumper.represent_list(array.tolist())


yaml.add_representer(np.float64, np64_representer)
yaml.add_representer(np.int64, npi64_representer)
yaml.add_representer(np.ndarray, ndarray_representer)


class ProjectComponent:
    ''' Base class for project components '''
    def __init__(self, name=None):
        self.name = name
        self.description = ''
        self._result = None

    @property
    def result(self):
        ''' Calculation result, calculated if necessary '''
        if self._result is None:
            self.calculate()
        return self._result

    def calculate(self):
        ''' Calculate the result '''
        # Subclass this

    def get_config(self):
        ''' Get configuration dictionary. Subclass this. '''
        return {'name': self.name,
                'desc': self.description}

    def load_config(self, config):
        ''' Load configuration into project component. Subclass this. '''

    @classmethod
    def from_config(cls, config):
        ''' Create new project component from the config dictionary '''
        proj = cls()
        proj.load_config(config)
        return proj

    def save_config(self, fname):
        ''' Save configuration to file.

            Args:
                fname: File name or open file object to write configuration to
        '''
        d = [self.get_config()]  # List allows multiple calculations in one file
        out = yaml.dump(d, default_flow_style=False)

        try:
            fname.write(out)
        except AttributeError:
            with open(fname, 'w', encoding='utf-8') as f:
                f.write(out)

    @classmethod
    def from_configfile(cls, fname):
        ''' Read and parse a yaml configuration file.

            Args:
                fname: File name or open file object to read configuration from

            Returns:
                New ProjectComponent instance, or None if the file could
                not be read as yaml.
        '''
        try:
            try:
                yml = fname.read()  # fname is file object
            except AttributeError:
                with open(fname, 'r', encoding='utf-8') as fobj:  # fname is string
                    yml = fobj.read()
        except UnicodeDecodeError:
            logging.warning('Config file %s is not a text file', fname)
            return None

        try:
            config = yaml.safe_load(yml)
        except yaml.YAMLError as exc:
            logging.warning('Invalid yaml in config file: %s', exc)
            return None

        if isinstance(config, list):
            config = config[0]
        if not isinstance(config, dict):
            logging.warning('Config file does not define a calculation')
            return None
        return cls.from_config(config)
