# Import required functions
from setuptools import setup, find_packages
# Call setup function

setup(
    author="distviz developers",
    description="Visualization tools for pairwise distance matrices",
    name="distviz",
    version="0.1.0",
    packages=find_packages(include=['distviz', 'distviz.*']),
    install_requires=['pandas>=1.3.1',
    'scipy>=1.6.2',
    'numpy>=1.20.3',
    'statsmodels>=0.12.2',
    'matplotlib>=3.5.0'
    ],
    extras_require={'test': ['pytest>=7.0']},
    python_requires='>=3.8',
    )
