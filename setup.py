from setuptools import setup, find_packages

setup(
    name='oaitool',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'requests',
        'python-dotenv',
        'pyyaml',
        'pydantic>=2',
        'prettytable',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'oaitool=oaitool.cli:main'
        ]
    },
    description='Command line client for the OpenShift Assisted Installer API',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
