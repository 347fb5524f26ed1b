#!/usr/bin/env python
from setuptools import find_packages, setup

setup(
    name="layer-composer",
    version="0.1.0",
    description="Interactive two-layer image compositor with blend modes",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "attrs>=23.1.0",
        "numpy",
        "Pillow>=10.0.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["layer-composer=layer_composer.__main__:main"],
    },
)
