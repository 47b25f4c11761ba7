""" Package for chord table resources: the four component tables of a chord system and how they are loaded. """
