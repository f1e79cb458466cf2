from setuptools import setup
from mountopt import __version__

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="mountopt",
    version=__version__,
    description="Parser for container --mount specifications",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=[
        "mountopt",
        "mountopt.cli",
        "mountopt.utils",
    ],
    install_requires=[
        'attrs>=19.2',
        'click>=7.0',
        'docker',
        'PyYAML',
    ],
    test_suite='tests',
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    entry_points='''
        [console_scripts]
        mountopt = mountopt.cli:cli
    ''',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Developers",
        "Development Status :: 2 - Pre-Alpha",
    ],
    python_requires='>=3.6',
)
