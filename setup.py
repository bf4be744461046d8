#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
from setuptools import setup, find_packages


def read(fname):
    with open(os.path.join(os.path.dirname(__file__), fname)) as fileobj:
        return fileobj.read()


meta = {}
exec(read("hashstore/__meta__.py"), meta)

readme = read("README.rst")
changes = read("CHANGES.rst")


setup(
    name=meta["__title__"],
    version=meta["__version__"],
    url=meta["__url__"],
    license=meta["__license__"],
    author=meta["__author__"],
    author_email=meta["__email__"],
    description=meta["__summary__"],
    long_description=readme + "\n\n" + changes,
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.8",
    install_requires=meta["__install_requires__"],
    extras_require={"test": meta["__tests_require__"]},
    entry_points={"console_scripts": ["hashstore = hashstore.__main__:main"]},
    keywords="hashstore hash content addressable record blob storage http",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "License :: OSI Approved :: MIT License",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
    ],
)
