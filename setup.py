from setuptools import setup, find_packages

setup(
    name="checkers-engine",
    version="1.0.0",
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    description="Rules and selection state engine for two-player checkers",
)
