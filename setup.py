#!/usr/bin/env python

from setuptools import setup
import os


def read(fname):
    with open(os.path.join(os.path.dirname(__file__), fname)) as f:
        return f.read()

# read in the version number
with open('seqtrace/__init__.py') as f:
    exec(f.read())

options = {
    'name': 'SeqTrace',
    'version': __version__,
    'description': 'AB1/SCF Sequencing Chromatogram Reader and Viewer Model',
    'author': 'SeqTrace Developers',
    'license': 'BSD 3-Clause',
    'platforms': ['Any'],
    'classifiers': [
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Topic :: Scientific/Engineering :: Bio-Informatics'
    ],
    'long_description': read('README.md'),
    'long_description_content_type': 'text/markdown',
    'packages': [
        'seqtrace', 'seqtrace.trace', 'seqtrace.tracefile', 'seqtrace.view'
    ],
    'scripts': [],
    'include_package_data': True,
    'python_requires': '>=3.6',
    'install_requires': ['numpy>=1.16.4', 'scipy>=1.2.0'],
    'extras_require': {
        'test': ['pytest'],
    }
}

# all the magic happens right here
setup(**options)
