# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Configuration for installing the dlp-job-triggers package."""

from setuptools import find_packages
from setuptools import setup

setup(
    name='dlp-job-triggers',
    version='0.0.1',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'google-cloud-dlp >=3.12',
        'google-api-core >=2.11',
        'google-auth >=2.16',
        'protobuf >=4.21',
    ],
    extras_require={
        'tests': ['pytest >=7.0'],
    },
    entry_points={
        'console_scripts': [
            'dlp-triggers=dlp_triggers.run:main',
        ],
    },
    url='N/A',
    author='N/A',
    author_email='N/A',
)
