"""
Setup script for the FeatureDetectors OpenCV detector bindings.
"""

from setuptools import setup, find_packages
import os


def read_requirements(filename):
    """Read requirements from file, filtering out comments and empty lines."""
    requirements = []
    if os.path.exists(filename):
        with open(filename, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    requirements.append(line)
    return requirements


def read_readme():
    """Read README file for long description."""
    if os.path.exists('README.md'):
        with open('README.md', 'r', encoding='utf-8') as f:
            return f.read()
    return "OpenCV feature detector bindings with typed options and error translation"


# Core requirements (always installed)
install_requires = read_requirements('requirements.txt') or [
    'opencv-python>=4.8.0,<5',
    'numpy>=1.19.0',
]

# Optional dependencies for different use cases
extras_require = {
    'dev': [
        'pytest>=6.0.0',
        'pytest-cov>=2.12.0',
        'flake8>=3.9.0'
    ],
}

setup(
    name="feature-detectors",
    version="1.0.0",
    author="Feature Detection Team",
    description="OpenCV feature detector wrappers with typed options and error translation",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=['FeatureDetectors', 'FeatureDetectors.*']),
    py_modules=['run_feature_detection'],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        'console_scripts': [
            'feature-detect=run_feature_detection:main',
        ],
    },
    keywords=[
        "computer vision",
        "feature detection",
        "AKAZE",
        "ORB",
        "SIFT",
        "opencv"
    ],
)
