''' Saved calculation setups '''

from .component import ProjectComponent
from .proj_sampling import ProjectSampling

__all__ = ['ProjectComponent', 'ProjectSampling']
