#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name='kid3-tagger',
    version='0.3.0',
    description='Command builder and output parser for the kid3-cli audio tagger - standalone library and beets plugin',
    author='kid3-tagger',
    packages=find_packages(exclude=['tests', 'tests.*', 'integration_tests', 'integration_tests.*']),
    py_modules=['beetsplug_kid3'],
    entry_points={
        'console_scripts': [
            'kid3-tag=kid3.cli:main',
        ],
    },
    install_requires=[
        # Optional: beets for plugin functionality
        'beets>=1.6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-asyncio>=0.21.0',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Multimedia :: Sound/Audio',
        'Topic :: Multimedia :: Sound/Audio :: Editors',
    ],
    python_requires='>=3.8',
)
