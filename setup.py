"""Setup script for omst"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="omst",
    version="3.0.0",
    author="ltdk",
    author_email="usr@ltdk.xyz",
    description="Reveals whomst thou art with a single character.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://vc.ltdk.xyz/cli/omst",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "Operating System :: POSIX",
        "Operating System :: Microsoft :: Windows",
        "Topic :: System :: Systems Administration",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.0.0",
        "tomli>=1.1.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "omst=omst.cli:main",
            "omst-be=omst.cli:main_be",
        ],
    },
    keywords="whoami permissions uid login.defs privileges cli",
)
