''' Shared statistics functions and report formatting '''
