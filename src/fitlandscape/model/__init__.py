"""
The MODEL layer contains pure data structures and the numeric engine.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the dataset, the RMSE metric, the error surface and the
predicted-vs-actual projection.
"""
