import setuptools

with open('README.md') as infile:
    long_description = infile.read()

with open('VERSION') as infile:
    version = infile.read().strip()

setuptools.setup(
    name='mjudge',
    version=version,
    description='Majority Judgment election evaluation library for Python',
    long_description=long_description,
    long_description_content_type='text/markdown; charset=UTF-8',
    python_requires='>=3.7.0',
    packages=setuptools.find_packages(exclude=('tests', 'docs')),
    install_requires=[],
    extras_require={
        'tests': ['pytest'],
        'docs': ['sphinx', 'recommonmark'],
    },
    include_package_data=True,
    license='MIT',
    keywords='voting election vote majority judgment median grade python',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True
)
