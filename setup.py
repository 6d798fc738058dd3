import re
import os.path

from setuptools import setup, find_packages


with open(
    os.path.join(os.path.dirname(__file__), 'gqlop', '__init__.py')
) as f:
    VERSION = re.match(
        r""".*__version__ = ['"](.*?)['"]""", f.read(), re.S
    ).group(1)

with open(
    os.path.join(os.path.dirname(__file__), 'README.rst')
) as f:
    DESCRIPTION = f.read()

setup(
    name='gqlop',
    version=VERSION,
    description='Execution orchestration for GraphQL servers',
    long_description=DESCRIPTION,
    long_description_content_type='text/x-rst',
    packages=find_packages(exclude=['test*', 'examples*']),
    include_package_data=True,
    license='BSD-3-Clause',
    python_requires='>=3.9',
    install_requires=[
        'graphql-core>=3.2,<3.3',
    ],
    extras_require={
        'prometheus': ['prometheus-client'],
        'sentry': ['sentry-sdk>=2.15,<3'],
        'tests': [
            'pytest',
            'pytest-asyncio',
            'faker',
            'prometheus-client',
            'sentry-sdk>=2.15,<3',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
