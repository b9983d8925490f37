import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='riffcracker',
    version='0.1.0',
    author='riffcracker developers',
    description='Tools for inspecting RIFF containers and AVI files.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_namespace_packages(where='src'),
    package_dir={'': 'src'},
    package_data={'riffcracker.kernel': ['*.pyi']},
    install_requires=[
        'deal>=4.19',
        'parse>=1.19',
        'PyYAML>=5.4',
        'typer>=0.4',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Topic :: Multimedia :: Video',
        'Topic :: Utilities'
    ],
    python_requires='>=3.8',
    keywords='riff avi chunk list container parse video stream'
)
