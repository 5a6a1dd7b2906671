from setuptools import setup, find_packages

setup(
    name="udp-passgen",
    version="1.0.0",
    description="UDP password generator: fixed-record client/server protocol",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "colorama",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "passgen-server = passgen.server:main",
            "passgen-client = passgen.client:main",
        ],
    },
    python_requires=">=3.10",
)
