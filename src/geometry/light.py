# geometry/light.py
from core.vector import Vector3

class Light:
    """
    A point light. Intensity scales both the diffuse and specular terms.
    """
    def __init__(self, position: Vector3, intensity: float = 1.0):
        self.position = position
        self.intensity = intensity

    def __repr__(self) -> str:
        return f"Light(position={self.position}, intensity={self.intensity})"
