from setuptools import setup, find_packages

requirements = []
with open('requirements.txt') as f:
    requirements = f.read().splitlines()


setup(name='liftai-heatmap',
      version='0.0.1',
      description=("LiftAi maintenance heat map engine",
                   "turn accelerometer motion inside the car into floor and position heat maps")[0],
      packages=find_packages(),
      entry_points={
          'console_scripts': [
              'heatmapreplay = heatmap_engine.main:main',
          ]
      },
      install_requires=requirements,
      extras_require={
          'test': ['freezegun', 'pytest'],
      },
      python_requires='>=3.7',
      classifiers=(
          'Intended Audience :: Other Audience',
          'Natural Language :: English',
          'License :: Other/Proprietary License',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: CPython',
      ),
      )
