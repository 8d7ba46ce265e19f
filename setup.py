from setuptools import setup

setup(
    name='igsplit',
    version='1.0',
    py_modules=[
        'dataset',
        'ig_split',
        'opt_ig_split',
        'default_ig_split',
        'split_evaluator',
    ],
    python_requires='>=3.10',
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
    description='Information gain split search for decision tree training',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
