#!/usr/bin/env python3

from setuptools import setup, find_namespace_packages


setup(name='py_line_sets',
      version='0.1.0',
      description='Set operations (union, intersect, diff, single, multiple) over lines of files',
      author='Davide Libenzi',
      packages=find_namespace_packages(include=['py_line_sets', 'py_line_sets.*']),
      include_package_data=True,
      python_requires='>=3.8',
      install_requires=[
          'pyyaml',
          'psutil',
          'fsspec',
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
      entry_points={
          'console_scripts': [
              'line_sets=py_line_sets.line_sets_main:main',
          ],
      },
      )
