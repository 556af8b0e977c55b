# camera/camera.py
from core.vector import Vector3

class Camera:
    """
    Pinhole camera aimed from `position` at `look_at`.

    The image plane passes through `look_at` and is spanned by the derived
    `right` and `view_up` vectors. Call update_basis() after replacing
    position, look_at or up.
    """
    def __init__(self, position: Vector3 = None, look_at: Vector3 = None, up: Vector3 = None):
        self.position = position if position is not None else Vector3(0.0, 0.0, 100.0)
        self.look_at = look_at if look_at is not None else Vector3(0.0, 0.0, 0.0)
        self.up = up if up is not None else Vector3(0.0, 1.0, 0.0)
        self.update_basis()

    def update_basis(self):
        """Recomputes the orthonormal forward/right/view_up basis."""
        self.forward = (self.look_at - self.position).normalize()
        # A forward vector parallel to up leaves right/view_up at zero and
        # collapses the image plane onto look_at.
        self.right = self.forward.cross(self.up).normalize()
        self.view_up = self.right.cross(self.forward).normalize()

    def image_plane_point(self, x: float, y: float, image_scale: float = 1.0) -> Vector3:
        """Point on the image plane at offset (x, y) from look_at."""
        return (self.look_at +
                self.right * (x * image_scale) +
                self.view_up * (y * image_scale))

    def move(self, amount: float):
        """Moves position and look_at together along the view direction."""
        offset = self.forward * amount
        self.position = self.position + offset
        self.look_at = self.look_at + offset
        self.update_basis()

    def strafe(self, amount: float):
        """Moves position and look_at together sideways."""
        offset = self.right * amount
        self.position = self.position + offset
        self.look_at = self.look_at + offset
        self.update_basis()

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, look_at={self.look_at}, up={self.up})"
