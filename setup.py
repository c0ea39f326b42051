#!/usr/bin/env python3
from setuptools import setup

import th10switch.const as th10_const

NAME = "th10switch"
DESCRIPTION = "HomeKit outlet, contact and temperature sensor for Sonoff TH10/TH16 relays"
URL = "https://github.com/th10switch/{}".format(NAME)
AUTHOR = "th10switch contributors"


PROJECT_URLS = {
    "Bug Reports": "{}/issues".format(URL),
    "Source": "{}/tree/master".format(URL),
}


MIN_PY_VERSION = ".".join(map(str, th10_const.REQUIRED_PYTHON_VER))

with open("README.md", "r", encoding="utf-8") as f:
    README = f.read()


REQUIRES = ["HAP-python>=4.5.0", "aiohttp"]


setup(
    name=NAME,
    version=th10_const.__version__,
    description=DESCRIPTION,
    long_description=README,
    long_description_content_type="text/markdown",
    url=URL,
    author=AUTHOR,
    packages=["th10switch"],
    project_urls=PROJECT_URLS,
    python_requires=">={}".format(MIN_PY_VERSION),
    install_requires=REQUIRES,
    license="Apache License 2.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Home Automation",
    ],
    entry_points={
        "console_scripts": ["th10switch = th10switch.__main__:main"],
    },
    extras_require={
        "QRCode": ["HAP-python[QRCode]"],
        "test": ["pytest", "pytest-asyncio"],
    },
)
