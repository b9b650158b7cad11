#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="onlinemix",
    version="0.1.0",
    description="Incremental bounded mixture-density estimation",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # finds onlinemix/ (and subpackages), excluding tests and examples
    packages=find_packages(exclude=["tests*", "examples*", "docs*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
        "prefect>=2.14,<3",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
