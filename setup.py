from setuptools import setup

version = {}
with open('sampdist/version.py', 'r') as f:
    exec(f.read(), version)

with open('README.md', 'r') as f:
    long_description = f.read()

setup(
    name='sampdist',
    version=version['__version__'],
    description='Sampling Distribution Explorer',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.19',
        'scipy>=1.5',
        'markdown>=3.3',
        'pyyaml>=5.4',
        ],
    extras_require={'test': ['pytest']},
    packages=['sampdist',
              'sampdist.common',
              'sampdist.common.style',
              'sampdist.histogram',
              'sampdist.histogram.report',
              'sampdist.sampling',
              'sampdist.sampling.report',
              'sampdist.project'],
    entry_points={
        'console_scripts': ['sampdist = sampdist.__main__:main_sample',
                            'sampdistf = sampdist.__main__:main_setup',
                            ],
        },
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Operating System :: OS Independent',
        ]
    )
