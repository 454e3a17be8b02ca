

# settings   
DEBUG = False
VERBOSE = True



