''' Example driver file for creating a subsmoor project from a YAML file.

This example uses the subsOntology.yaml file as input: two subsurface
moorings at an 85 m site, one of them set in 60 m of water.

Section 1 loads the project and sweeps each mooring over its current speeds
Section 2 checks whether the top elements stay below a target depth
Section 3 looks at one mooring in more detail and builds a variant of it
'''

# import necessary packages
from subsmoor.project import Project
from subsmoor.mooring.mooring import SubsMooring
import os
import matplotlib.pyplot as plt

# set yaml file location and name
dir = os.path.dirname(os.path.realpath(__file__))
ontology_file = os.path.join(dir,"subsOntology.yaml")

#%% Section 1: load and run the project
print('Creating project\n')

project = Project(file=ontology_file, nproc=2, display=1)
results = project.run()

# plot the profiles of every mooring at its fastest current speed
project.plot()

#%% Section 2: submergence check
print('\nChecking submergence\n')

# the top float of each mooring should stay at least 10 m below the surface
report = project.getSubmergenceReport(targetDepth=10.0)
for mID, r in report.items():
    if r['belowSeabed']:
        status = 'net buoyancy is negative, chain hangs below the anchor'
    elif r['submerged']:
        status = 'ok'
    else:
        status = 'too shallow'
    print(f"{mID}: {status}")

#%% Section 3: one mooring in detail
moor = project.mooringList['ADCP_1']

# results for each element at the fastest current
moor.printResults(moor.results[-1])

# drag profile and tension/rise/angle over the sweep
moor.plotProfile()
moor.plotSweep()

# a lighter variant: swap the railroad wheel for a 500 lb anchor
variant = SubsMooring(dd=project.mooringList['ADCP_1'].dd, elementProps=project.elementProps,
                      depth=moor.depth, friction=moor.friction,
                      currentSpeeds=moor.currentSpeeds, id='ADCP_1 light')
variant.removeElement(0)
variant.addElement('500 LBS', name='anchor', index=0)
variant.checkConfig()
variant.sweepCurrents()
print(variant.getSummary())

plt.show()
