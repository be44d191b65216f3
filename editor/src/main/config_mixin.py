"""Configuration management for CoDrawing Canvas Editor"""

import os
import json
import logging

from constants import AVAILABLE_MODELS


logger = logging.getLogger('Config')


class ConfigMixin:
	"""Persisted pen and model settings plus the last image folder"""
	
	def _load_config(self):
		"""Load settings from the config file into the session context"""
		if not os.path.exists(self.config_file):
			return
		try:
			with open(self.config_file, 'r', encoding='utf-8') as f:
				config = json.load(f)
		except (OSError, ValueError) as e:
			logger.warning(f"Ignoring unreadable config {self.config_file}: {e}")
			return
		
		context = self.session.context
		context.pen_color = config.get('pen_color', context.pen_color)
		context.pen_width = int(config.get('pen_width', context.pen_width))
		# Only accept models the selector offers
		model = config.get('selected_model')
		if model in {value for value, _ in AVAILABLE_MODELS}:
			context.selected_model = model
		last_dir = config.get('last_image_dir')
		if last_dir and os.path.isdir(last_dir):
			self.last_image_dir = last_dir
	
	def _save_config(self):
		"""Save settings to the config file"""
		context = self.session.context
		config = {
			'pen_color': context.pen_color,
			'pen_width': context.pen_width,
			'selected_model': context.selected_model,
			'last_image_dir': self.last_image_dir,
		}
		try:
			# Create config directory if it doesn't exist
			os.makedirs(self.config_dir, exist_ok=True)
			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except OSError as e:
			logger.warning(f"Could not save config {self.config_file}: {e}")
