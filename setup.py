"""
Setup script for colmat

colmat is pure Python on top of numpy and scipy. The optional ``cblas``
multiply backend loads a system CBLAS library at runtime through ctypes,
so nothing is compiled at install time.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/colmat/__init__.py
def get_version():
    version_file = Path("src/colmat/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="colmat",
    version=get_version(),
    description="Column-major typed matrices with views, sparse storage and BLAS dispatch",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    zip_safe=True,
)
