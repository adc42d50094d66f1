"""Build configuration for the sexp package."""

from setuptools import setup

setup(
    name="sexp",
    version="0.2.0",
    description="Streaming S-expression parser with flexible and canonical tree forms",
    python_requires=">=3.9",
    packages=["sexp"],
    package_dir={"sexp": "python/sexp"},
    package_data={"sexp": ["py.typed"]},
    extras_require={
        "test": ["pytest>=7", "pytest-benchmark>=4"],
    },
)
