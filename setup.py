# setup.py
from setuptools import setup, find_packages

setup(
    name="phase-change",
    version="0.1",
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.8',
    install_requires=[
        'tqdm>=4.65.0',
        'python-ffmpeg>=2.0.0',
        'Pillow>=10.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'phase-change=phase_change.main:main',
        ],
    },
)
