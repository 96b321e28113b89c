"""
hashcons: Common Subexpression Elimination by Structural Hash-Consing

Reads tree-shaped expressions line by line and rewrites each so that
every repeated subtree becomes a reference to its first occurrence.
"""

from setuptools import setup, find_packages

setup(
    name="hashcons",
    version="1.0.0",
    description="Common subexpression elimination for tree expressions via structural hash-consing",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="hashcons developers",
    python_requires=">=3.10",
    packages=find_packages(include=["hashcons", "hashcons.*"]),
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "hashcons=hashcons.__main__:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Compilers",
    ],
)
