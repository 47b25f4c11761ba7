#!/usr/bin/env python3

""" Build script for the chord speller. Extra commands may be run by name, e.g. > python3 setup.py clean. """

import glob
import os
import shutil
import subprocess
import sys

from setuptools import Command as stCommand, find_packages, setup


def iglob_all(*patterns):
    """ Yield each unique file path that matches one of many glob <patterns>. """
    seen = set()
    for pattern in patterns:
        for path in glob.iglob(pattern, recursive=True):
            if path not in seen:
                yield path
                seen.add(path)


class Command(stCommand):
    """ Setuptools command with default fields and methods defined. """
    user_options = []
    def initialize_options(self):
        self.args = []
    def finalize_options(self):
        pass


class CommandNamespace:
    """ Contains all extra command classes for use in setuptools.setup(). """

    class clean(Command):
        description = "Remove all build and test-generated files."
        def run(self):
            for path in iglob_all('.pytest_cache', 'build', 'dist', '*.egg-info', '**/__pycache__'):
                if os.path.isdir(path):
                    shutil.rmtree(path)
                elif os.path.exists(path):
                    os.remove(path)

    class run(Command):
        description = "Run the speller from source. Arguments are passed through (e.g. lookup cats)."
        command_consumes_arguments = True
        def run(self):
            cmd = (sys.executable, '-m', 'chord_speller', *self.args)
            subprocess.run(cmd, check=True)

    class bench(Command):
        description = "Time and profile the speller components with the demo table."
        command_consumes_arguments = True
        def run(self):
            cmd = (sys.executable, '-m', 'benchmarks', *self.args)
            subprocess.run(cmd, check=True)

    class test(Command):
        description = "Run all unit tests."
        def run(self):
            import pytest
            sys.exit(pytest.main(["test"]))


setup(
    name="chord_speller",
    version="1.0.0",
    description="Finds every way to spell a word as a sequence of chords from a component chord table.",
    packages=find_packages(exclude=["test", "test.*", "benchmarks", "benchmarks.*"]),
    package_data={"chord_speller": ["assets/*.json"]},
    python_requires=">=3.7",
    install_requires=["aiohttp"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["chord-speller=chord_speller.__main__:main"]},
    cmdclass=dict(vars(CommandNamespace)),
)
