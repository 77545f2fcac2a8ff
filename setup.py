""" hdchain build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import hdchain

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=hdchain.name,
    version=hdchain.__version__,
    license=hdchain.__license__,
    author=hdchain.__author__,
    author_email=hdchain.__author_email__,
    description="Hierarchical deterministic key chain: BIP39 mnemonic to address",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "hdchain": ["_data/*.json"],
        "hdchain.mnemonic": ["_data/*.txt"],
    },
    install_requires=["pycryptodome", "dataclasses_json"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "bip32 bip39 bip44 hd-wallet mnemonic seed extended-keys "
        "secp256k1 keccak eip-55 ethereum-address"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
