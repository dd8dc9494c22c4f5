from setuptools import setup, find_packages

setup(
    name='heatmap_downsampling',
    version='1.0.0',
    description='Multi-resolution downsampling pyramids for interactive heatmaps',
    author='Heatmap component authors; Python port',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.21',
        'scipy>=1.7',
        'matplotlib>=3.4',
        'Pillow>=8.0',
        'scikit-image>=0.19',
    ],
    extras_require={
        'dev': ['pytest>=7.0'],
    },
    test_suite='tests',
    tests_require=['pytest>=7.0'],
)
