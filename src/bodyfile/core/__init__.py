"""Line codec, validation and runtime support for bodyfile."""
