#!/usr/bin/env python
# noqa: D100

from setuptools import find_packages, setup

# Get version without importing, which avoids dependency issues
exec(compile(open('parsetrain/version.py').read(), 'parsetrain/version.py', 'exec'))
# (we use the above instead of execfile for Python 3.x compatibility)


def readme():  # noqa: D103
    with open('README.md') as f:
        return f.read()


def requirements():  # noqa: D103
    with open('requirements.txt') as f:
        return [line.strip() for line in f
                if line.strip() and not line.startswith('#')]


setup(name='parsetrain',
      version=__version__,  # noqa: F821
      description=('Training event extraction for bottom-up shift-reduce '
                   'constituency parsers, derived from gold Penn Treebank '
                   'style trees.'),
      long_description=readme(),
      long_description_content_type='text/markdown',
      keywords='constituency parsing shift-reduce treebank',
      license='MIT',
      packages=find_packages(exclude=['tests']),
      include_package_data=True,
      python_requires='>=3.8',
      entry_points={'console_scripts': ['extract_parser_events = parsetrain.extract_events:main',
                                        'train_parser_model = parsetrain.train_parser_model:main']},  # noqa: E501
      install_requires=requirements(),
      extras_require={'test': ['pytest']},
      zip_safe=False)
