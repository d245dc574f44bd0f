from setuptools import setup, find_packages
setup(
    name="splitmerge",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["blake3"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["splitmerge = splitmerge.cli:main"]},
    python_requires=">=3.10",
)
