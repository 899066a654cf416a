SRD_CONF_SAMPLERATE = 0
OUTPUT_ANN = 0
OUTPUT_PYTHON = 1
OUTPUT_BINARY = 2
OUTPUT_LOGIC = 3
OUTPUT_META = 4

# Number of logic channels carried by one sample.
SAMPLE_WIDTH = 8

class ChannelMapError(Exception):
	pass

class Decoder:

	session = None
	inputs = []
	outputs = []
	tags = []
	channels = ()
	annotations = ()
	annotation_rows = ()
	binary = ()
	samplenum = 0
	matched = ()

	def wait(self, conds = None):
		result = self.session.wait(conds)
		if result == None:
			raise EOFError("Terminated")
		return result

	def put(self, startsample, endsample, output_id, data):
		self.session.put(startsample, endsample, output_id, data)

	def register (self, output_type, meta = None):
		return self.session.register(output_type, meta)

class Session:
	'''
	Runs one decoder instance over a stream of (seqno, sample) pairs.

	The channel map assigns a bit position of the sample byte to each of
	the decoder's channels, keyed by channel id.
	'''

	def __init__(self, decoder, channel_map):
		self.decoder = decoder
		self.bits = self.resolve_channels(channel_map)
		self.outputs = []
		self.callbacks = {}
		self.samples = None
		self.oldpins = None

		decoder.session = self

	def resolve_channels(self, channel_map):
		known = [c['id'] for c in self.decoder.channels]
		unknown = [cid for cid in channel_map if cid not in known]
		if unknown:
			raise ChannelMapError('Unknown channel(s): %s' % ', '.join(unknown))

		for c in self.decoder.channels:
			if c['id'] not in channel_map:
				raise ChannelMapError('Channel %s (%s) is required.' % (c['id'], c['name']))

		used = {}
		for cid, bit in channel_map.items():
			if not 0 <= bit < SAMPLE_WIDTH:
				raise ChannelMapError('Channel %s: bit %d is out of range (0..%d).'
					% (cid, bit, SAMPLE_WIDTH - 1))
			if bit in used:
				raise ChannelMapError('Channels %s and %s share bit %d.' % (used[bit], cid, bit))
			used[bit] = cid

		return [channel_map[cid] for cid in known]

	def add_callback(self, output_type, callback):
		self.callbacks.setdefault(output_type, []).append(callback)

	def register(self, output_type, meta = None):
		self.outputs.append((output_type, meta))
		return len(self.outputs) - 1

	def put(self, startsample, endsample, output_id, data):
		output_type, _ = self.outputs[output_id]
		for callback in self.callbacks.get(output_type, ()):
			callback(startsample, endsample, data)

	def pins(self, sample):
		return tuple((sample >> bit) & 1 for bit in self.bits)

	def match_term(self, idx, cond, pins):
		if cond != 'e':
			raise ValueError('Unsupported condition: %r' % cond)
		# The very first sample has no history, so it is never an edge.
		return self.oldpins is not None and self.oldpins[idx] != pins[idx]

	def match(self, conds, pins):
		return tuple(all(self.match_term(idx, term, pins) for idx, term in cond.items())
			for cond in conds)

	def wait(self, conds):
		if conds is None:
			conds = []
		elif isinstance(conds, dict):
			conds = [conds]

		for seqno, sample in self.samples:
			pins = self.pins(sample)
			matched = self.match(conds, pins)
			self.oldpins = pins
			if not conds or any(matched):
				self.decoder.samplenum = seqno
				self.decoder.matched = matched
				return pins
		return None

	def run(self, samples):
		self.samples = iter(samples)
		self.oldpins = None
		self.decoder.start()
		try:
			self.decoder.decode()
		except EOFError:
			pass
