#!/usr/bin/env python3
"""
Setup script for Sign Caption
"""

from setuptools import find_packages, setup


setup(
    name="signcaption",
    version="0.1.0",
    description="Rule-based hand sign recognition with debounced captions and SRT export",
    packages=find_packages(include=["signcaption", "signcaption.*"]),
    package_data={"signcaption": ["config.default.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "PyYAML",
        "python-dotenv",
    ],
    extras_require={
        "camera": [
            "opencv-python",
            "mediapipe",
        ],
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "signcaption=signcaption.main:main",
        ],
    },
)
