from setuptools import setup, find_namespace_packages

setup(
    name="projectx",
    version="0.1.0",
    python_requires=">=3.10",
    packages=find_namespace_packages(where="src", include=["projectx*"]),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "projectx=projectx.CLI.main:main",
        ],
    },
)
