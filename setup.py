# -*- coding: utf-8 -*-
"""
PyRDFDecoder
============

PyRDFDecoder_ is a streaming decoder for N-Triples, N-Quads and Turtle.

.. _PyRDFDecoder: https://pypi.org/project/PyRDFDecoder/
"""

from setuptools import setup
import os

# get meta data
about = {}
with open(os.path.join(
        os.path.dirname(__file__), 'lib', 'rdfdecoder', '__about__.py')) as fp:
    exec(fp.read(), about)

with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as fp:
    long_description = fp.read()

setup(
    name='PyRDFDecoder',
    version=about['__version__'],
    description='Streaming decoder for N-Triples, N-Quads and Turtle',
    long_description=long_description,
    packages=['rdfdecoder', 'rdfdecoder.documentloader'],
    package_dir={'': 'lib'},
    license='BSD 3-Clause license',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries',
        'Topic :: Text Processing',
    ],
    python_requires='>=3.7',
    install_requires=[],
    extras_require={
        'requests': ['requests'],
        'test': ['pytest', 'requests'],
    },
    entry_points={
        'console_scripts': ['rdfdecode = rdfdecoder.cli:main'],
    },
)
