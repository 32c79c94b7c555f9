# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="bdd-inventory",
    version="1.0.0",
    description="Lists the suites and tests declared by describe/it test files without running them",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["bdd_inventory*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'bdd-inventory=bdd_inventory.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
