class FixedRng:
    """Stand-in for np.random.Generator with canned draws"""

    def __init__(self, draw=0.0, angle=0.0):
        self.draw = draw
        self.angle = angle

    def random(self):
        return self.draw

    def uniform(self, low=0.0, high=1.0):
        return self.angle
