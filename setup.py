"""
PushBox: a push-box puzzle engine on JAX
"""

import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="pushbox",
    version="0.1.0",
    description="Push-box (Sokoban-style) puzzle engine built on Jax",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"pushbox": ["data/levels/*.map"]},
    install_requires=[
        "jax>=0.4.0",
        "chex>=0.1.0",
        "numpy>=1.24.0",
        "xtructure",
        "termcolor>=2.1.0",
        "tabulate>=0.9.0",
        "tqdm>=4.67.1",
        "click>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "pushbox=pushbox.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.10",
)
