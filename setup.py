# setup.py
from setuptools import setup, find_packages


def parse_reqs(fname="requirements.txt"):
    with open(fname) as f:
        # strip comments and empty lines
        return [l.strip() for l in f if l.strip() and not l.startswith("#")]


setup(
    name="belemsat",
    version="0.1.0",
    package_dir={"belemsat": "belemsat"},
    packages=find_packages(include=["belemsat", "belemsat.*"]),
    install_requires=parse_reqs(),
    extras_require={"test": ["pytest", "Pillow"]},
    package_data={"belemsat": ["resources/*.json"]},
    include_package_data=True,
    python_requires=">=3.10",
    entry_points={"console_scripts": ["belemsat=belemsat.core.cli:cli"]},
)
