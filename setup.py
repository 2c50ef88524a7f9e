from setuptools import find_namespace_packages, setup

setup(
    name="neufetch",
    version="0.1.0",
    description="Downloads Neutralinojs binaries, client library and app templates",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["neufetch*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests",
        "rich",
        "PyYAML",
        "platformdirs",
        "packaging",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "neufetch=neufetch.cli:main",
        ],
    },
)
