# setup.py
from setuptools import setup, find_packages

setup(
    name="sprintcal",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "python-dateutil",
        "matplotlib",
        "reportlab",
    ],
    extras_require={
        "test": [
            "pytest",
            "pypdf",
        ],
    },
    entry_points={
        "console_scripts": [
            "sprintcal=sprintcal.main:main",
        ],
    },
)
