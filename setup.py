from setuptools import setup

with open("README.md", 'r') as f:
    long_description = f.read()

setup(
   name='groupenc',
   version='1.0',
   description='Public-key encryption of vectors of elliptic-curve group elements',
   license="GPL",
   long_description=long_description,
   long_description_content_type="text/markdown",
   packages=['groupenc'],
   python_requires='>=3.9',
   install_requires=[
        'petrelic==0.1.5',
       ], #external packages as dependencies
   extras_require={
        'bench': ['numpy'],
        'test': ['pytest'],
       },
)
