from setuptools import find_packages, setup

setup(
    name="humint-crypto",
    version="0.1.0",
    packages=find_packages(include=["humint", "humint.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "cryptography",
        "requests",
        "click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "humint=humint.cli:cli",
        ],
    },
)
